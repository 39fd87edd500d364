"""
Storage contract shared by the in-memory and relational backends.

Callers (API routers, dashboard, seeding) depend only on ``Storage``; a backend
is picked once at application start-up.
"""
from abc import ABC, abstractmethod
from datetime import datetime, time, timedelta
from typing import List, Optional, Tuple

from ..schemas import (
    PatientCreate,
    PatientUpdate,
    PatientRecord,
    ConsultationCreate,
    ConsultationUpdate,
    ConsultationRecord,
)


class StorageError(Exception):
    """The backing store failed; details are logged, never returned to clients."""


class UnknownPatientError(StorageError):
    """A consultation referenced a patient id that does not exist."""

    def __init__(self, patient_id: int):
        super().__init__(f"Patient {patient_id} does not exist")
        self.patient_id = patient_id


def today_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """[local midnight today, local midnight tomorrow) as naive local datetimes."""
    now = now or datetime.now()
    start = datetime.combine(now.date(), time.min)
    return start, start + timedelta(days=1)


class Storage(ABC):
    # ── patients ─────────────────────────────────────────────────────────────

    @abstractmethod
    def get_patient(self, patient_id: int) -> Optional[PatientRecord]:
        ...

    @abstractmethod
    def list_patients(self) -> List[PatientRecord]:
        """All patients, most recently created first."""

    @abstractmethod
    def create_patient(self, payload: PatientCreate) -> PatientRecord:
        ...

    @abstractmethod
    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Optional[PatientRecord]:
        """Apply the fields present in ``payload``; None if the patient is unknown."""

    @abstractmethod
    def delete_patient(self, patient_id: int) -> bool:
        """Delete the patient and every consultation that references it."""

    @abstractmethod
    def search_patients(self, query: str) -> List[PatientRecord]:
        """
        Substring search. Names and email match case-insensitively, the phone
        number matches the literal query as typed.
        """

    # ── consultations ────────────────────────────────────────────────────────

    @abstractmethod
    def get_consultation(self, consultation_id: int) -> Optional[ConsultationRecord]:
        ...

    @abstractmethod
    def list_consultations(self) -> List[ConsultationRecord]:
        """All consultations, latest appointment first."""

    @abstractmethod
    def list_consultations_by_patient(self, patient_id: int) -> List[ConsultationRecord]:
        """A patient's consultations, latest appointment first."""

    @abstractmethod
    def create_consultation(self, payload: ConsultationCreate) -> ConsultationRecord:
        ...

    @abstractmethod
    def update_consultation(
        self, consultation_id: int, payload: ConsultationUpdate
    ) -> Optional[ConsultationRecord]:
        ...

    @abstractmethod
    def delete_consultation(self, consultation_id: int) -> bool:
        ...

    @abstractmethod
    def list_today_consultations(self, now: Optional[datetime] = None) -> List[ConsultationRecord]:
        """Consultations inside today's local window, earliest appointment first."""
