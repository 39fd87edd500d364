"""
Process-local storage backend.

Records live in two dicts and vanish on restart. Intended for development and
tests: read-modify-write operations (update, cascading delete) are not
synchronised, so concurrent writers to the same record can interleave.
"""
import itertools
import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..schemas import (
    PatientCreate,
    PatientUpdate,
    PatientRecord,
    ConsultationCreate,
    ConsultationUpdate,
    ConsultationRecord,
)
from .base import Storage, today_window

logger = logging.getLogger(__name__)


class MemStorage(Storage):
    def __init__(self):
        self._patients: Dict[int, PatientRecord] = {}
        self._consultations: Dict[int, ConsultationRecord] = {}
        self._patient_ids = itertools.count(1)
        self._consultation_ids = itertools.count(1)

    # Patients

    def get_patient(self, patient_id: int) -> Optional[PatientRecord]:
        return self._patients.get(patient_id)

    def list_patients(self) -> List[PatientRecord]:
        return sorted(
            self._patients.values(),
            key=lambda p: (p.created_at, p.id),
            reverse=True,
        )

    def create_patient(self, payload: PatientCreate) -> PatientRecord:
        patient = PatientRecord(
            id=next(self._patient_ids),
            created_at=datetime.now(),
            **payload.changes(),
        )
        self._patients[patient.id] = patient
        return patient

    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Optional[PatientRecord]:
        patient = self._patients.get(patient_id)
        if patient is None:
            return None
        updated = patient.model_copy(update=payload.changes())
        self._patients[patient_id] = updated
        return updated

    def delete_patient(self, patient_id: int) -> bool:
        if patient_id not in self._patients:
            return False
        orphans = [c.id for c in self._consultations.values() if c.patient_id == patient_id]
        for consultation_id in orphans:
            del self._consultations[consultation_id]
        if orphans:
            logger.info("Removed %d consultations of patient %s", len(orphans), patient_id)
        del self._patients[patient_id]
        return True

    def search_patients(self, query: str) -> List[PatientRecord]:
        needle = query.lower()
        matches = [
            p for p in self._patients.values()
            if needle in p.first_name.lower()
            or needle in p.last_name.lower()
            or query in p.phone_number
            or (p.email and needle in p.email.lower())
        ]
        return sorted(matches, key=lambda p: (p.created_at, p.id), reverse=True)

    # Consultations

    def get_consultation(self, consultation_id: int) -> Optional[ConsultationRecord]:
        return self._consultations.get(consultation_id)

    def list_consultations(self) -> List[ConsultationRecord]:
        return self._latest_first(self._consultations.values())

    def list_consultations_by_patient(self, patient_id: int) -> List[ConsultationRecord]:
        return self._latest_first(
            c for c in self._consultations.values() if c.patient_id == patient_id
        )

    def create_consultation(self, payload: ConsultationCreate) -> ConsultationRecord:
        consultation = ConsultationRecord(
            id=next(self._consultation_ids),
            created_at=datetime.now(),
            **payload.changes(),
        )
        self._consultations[consultation.id] = consultation
        return consultation

    def update_consultation(
        self, consultation_id: int, payload: ConsultationUpdate
    ) -> Optional[ConsultationRecord]:
        consultation = self._consultations.get(consultation_id)
        if consultation is None:
            return None
        updated = consultation.model_copy(update=payload.changes())
        self._consultations[consultation_id] = updated
        return updated

    def delete_consultation(self, consultation_id: int) -> bool:
        return self._consultations.pop(consultation_id, None) is not None

    def list_today_consultations(self, now: Optional[datetime] = None) -> List[ConsultationRecord]:
        start, end = today_window(now)
        return sorted(
            (c for c in self._consultations.values() if start <= c.appointment_date < end),
            key=lambda c: (c.appointment_date, c.id),
        )

    @staticmethod
    def _latest_first(consultations) -> List[ConsultationRecord]:
        return sorted(consultations, key=lambda c: (c.appointment_date, c.id), reverse=True)
