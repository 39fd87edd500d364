"""
Dashboard statistics - operational counts derived from the storage layer.
"""
from dataclasses import dataclass
from typing import List, Optional

from ..models.consultation import ConsultationStatus
from ..schemas import ConsultationRecord, PatientRecord
from ..storage import Storage


@dataclass
class DashboardStats:
    total_patients: int
    today_appointments: int
    completed_today: int
    remaining_today: int
    pending_reports: int
    # Billing is not modelled; stays None until a real revenue source exists
    monthly_revenue: Optional[int] = None


class DashboardService:
    """Snapshot counts for the front-desk dashboard. Holds no state of its own."""

    def compute(
        self,
        patients: List[PatientRecord],
        consultations: List[ConsultationRecord],
        today: List[ConsultationRecord],
    ) -> DashboardStats:
        completed_today = sum(1 for c in today if c.status == ConsultationStatus.COMPLETED)
        return DashboardStats(
            total_patients=len(patients),
            today_appointments=len(today),
            completed_today=completed_today,
            remaining_today=len(today) - completed_today,
            pending_reports=sum(1 for c in consultations if self.is_report_pending(c)),
        )

    def snapshot(self, storage: Storage) -> DashboardStats:
        return self.compute(
            storage.list_patients(),
            storage.list_consultations(),
            storage.list_today_consultations(),
        )

    @staticmethod
    def is_report_pending(consultation: ConsultationRecord) -> bool:
        """A report is pending until both diagnosis and treatment are written up."""
        return not consultation.diagnosis or not consultation.treatment


dashboard_service = DashboardService()
