from fastapi import APIRouter, Depends
from typing import Optional

from ..schemas.base import CamelModel
from ..services.dashboard import dashboard_service
from ..storage import Storage, get_storage

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class DashboardStatsResponse(CamelModel):
    total_patients: int
    today_appointments: int
    completed_today: int
    remaining_today: int
    pending_reports: int
    monthly_revenue: Optional[int] = None


@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(storage: Storage = Depends(get_storage)):
    """
    Front-desk counts: patients on file, today's schedule progress and
    consultations still missing a diagnosis or treatment.
    ``monthlyRevenue`` is always null; billing is not tracked.
    """
    stats = dashboard_service.snapshot(storage)

    return DashboardStatsResponse(
        total_patients=stats.total_patients,
        today_appointments=stats.today_appointments,
        completed_today=stats.completed_today,
        remaining_today=stats.remaining_today,
        pending_reports=stats.pending_reports,
        monthly_revenue=stats.monthly_revenue,
    )
