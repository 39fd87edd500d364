from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .base import MAX_RECORD_ID, CamelModel, PayloadModel, blank_to_none, reject_null, to_local_naive

StatusValue = Literal["scheduled", "in-progress", "completed", "cancelled"]


class ConsultationCreate(PayloadModel):
    patient_id: int = Field(le=MAX_RECORD_ID)
    appointment_date: datetime
    consultation_type: str = Field(min_length=1, max_length=100)
    status: StatusValue
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: Optional[str] = None
    follow_up_date: Optional[date] = None

    @field_validator("follow_up_date", mode="before")
    @classmethod
    def _empty_follow_up(cls, value):
        return blank_to_none(value)

    @field_validator("appointment_date")
    @classmethod
    def _local_appointment(cls, value: datetime) -> datetime:
        return to_local_naive(value)


class ConsultationUpdate(PayloadModel):
    """Partial update: only the fields present in the body are applied."""

    patient_id: Optional[int] = Field(default=None, le=MAX_RECORD_ID)
    appointment_date: Optional[datetime] = None
    consultation_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    status: Optional[StatusValue] = None
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: Optional[str] = None
    follow_up_date: Optional[date] = None

    @field_validator("patient_id", "appointment_date", "consultation_type", "status", mode="before")
    @classmethod
    def _required_stays_set(cls, value):
        return reject_null(value)

    @field_validator("follow_up_date", mode="before")
    @classmethod
    def _empty_follow_up(cls, value):
        return blank_to_none(value)

    @field_validator("appointment_date")
    @classmethod
    def _local_appointment(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value) if value is not None else None


class ConsultationRecord(CamelModel):
    id: int
    patient_id: int
    appointment_date: datetime
    consultation_type: str
    status: StatusValue
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescriptions: Optional[str] = None
    follow_up_date: Optional[date] = None
    created_at: datetime
