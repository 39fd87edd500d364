"""
Relational storage backend on SQLAlchemy.

Every operation runs in its own session. Rows are converted to pydantic
records before the session closes so callers never touch ORM state.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..models.patient import Patient
from ..models.consultation import Consultation
from ..schemas import (
    PatientCreate,
    PatientUpdate,
    PatientRecord,
    ConsultationCreate,
    ConsultationUpdate,
    ConsultationRecord,
)
from .base import Storage, StorageError, UnknownPatientError, today_window

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session wrapped in a transaction that commits on success."""
        try:
            with self._session_factory.begin() as db:
                yield db
        except StorageError:
            raise
        except IntegrityError as exc:
            logger.warning("Integrity violation: %s", exc.orig)
            raise StorageError("Integrity violation") from exc
        except SQLAlchemyError as exc:
            logger.exception("Database operation failed")
            raise StorageError("Database operation failed") from exc

    # Patients

    def get_patient(self, patient_id: int) -> Optional[PatientRecord]:
        with self._session() as db:
            patient = db.get(Patient, patient_id)
            return PatientRecord.model_validate(patient) if patient else None

    def list_patients(self) -> List[PatientRecord]:
        with self._session() as db:
            rows = db.scalars(
                select(Patient).order_by(Patient.created_at.desc(), Patient.id.desc())
            ).all()
            return [PatientRecord.model_validate(p) for p in rows]

    def create_patient(self, payload: PatientCreate) -> PatientRecord:
        with self._session() as db:
            patient = Patient(created_at=datetime.now(), **payload.changes())
            db.add(patient)
            db.flush()
            return PatientRecord.model_validate(patient)

    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Optional[PatientRecord]:
        with self._session() as db:
            patient = db.get(Patient, patient_id)
            if patient is None:
                return None
            for field, value in payload.changes().items():
                setattr(patient, field, value)
            db.flush()
            return PatientRecord.model_validate(patient)

    def delete_patient(self, patient_id: int) -> bool:
        # Both statements share one transaction so a failure cannot orphan consultations
        with self._session() as db:
            patient = db.get(Patient, patient_id)
            if patient is None:
                return False
            result = db.execute(
                delete(Consultation).where(Consultation.patient_id == patient_id)
            )
            db.delete(patient)
            logger.info("Deleted patient %s with %d consultations", patient_id, result.rowcount)
            return True

    def search_patients(self, query: str) -> List[PatientRecord]:
        with self._session() as db:
            rows = db.scalars(
                select(Patient)
                .where(
                    or_(
                        Patient.first_name.icontains(query, autoescape=True),
                        Patient.last_name.icontains(query, autoescape=True),
                        Patient.email.icontains(query, autoescape=True),
                        Patient.phone_number.contains(query, autoescape=True),
                    )
                )
                .order_by(Patient.created_at.desc(), Patient.id.desc())
            ).all()
            return [PatientRecord.model_validate(p) for p in rows]

    # Consultations

    def get_consultation(self, consultation_id: int) -> Optional[ConsultationRecord]:
        with self._session() as db:
            consultation = db.get(Consultation, consultation_id)
            return ConsultationRecord.model_validate(consultation) if consultation else None

    def list_consultations(self) -> List[ConsultationRecord]:
        with self._session() as db:
            rows = db.scalars(
                select(Consultation).order_by(
                    Consultation.appointment_date.desc(), Consultation.id.desc()
                )
            ).all()
            return [ConsultationRecord.model_validate(c) for c in rows]

    def list_consultations_by_patient(self, patient_id: int) -> List[ConsultationRecord]:
        with self._session() as db:
            rows = db.scalars(
                select(Consultation)
                .where(Consultation.patient_id == patient_id)
                .order_by(Consultation.appointment_date.desc(), Consultation.id.desc())
            ).all()
            return [ConsultationRecord.model_validate(c) for c in rows]

    def create_consultation(self, payload: ConsultationCreate) -> ConsultationRecord:
        with self._session() as db:
            self._require_patient(db, payload.patient_id)
            consultation = Consultation(created_at=datetime.now(), **payload.changes())
            db.add(consultation)
            db.flush()
            return ConsultationRecord.model_validate(consultation)

    def update_consultation(
        self, consultation_id: int, payload: ConsultationUpdate
    ) -> Optional[ConsultationRecord]:
        changes = payload.changes()
        with self._session() as db:
            consultation = db.get(Consultation, consultation_id)
            if consultation is None:
                return None
            if "patient_id" in changes:
                self._require_patient(db, changes["patient_id"])
            for field, value in changes.items():
                setattr(consultation, field, value)
            db.flush()
            return ConsultationRecord.model_validate(consultation)

    def delete_consultation(self, consultation_id: int) -> bool:
        with self._session() as db:
            consultation = db.get(Consultation, consultation_id)
            if consultation is None:
                return False
            db.delete(consultation)
            return True

    def list_today_consultations(self, now: Optional[datetime] = None) -> List[ConsultationRecord]:
        start, end = today_window(now)
        with self._session() as db:
            rows = db.scalars(
                select(Consultation)
                .where(Consultation.appointment_date >= start)
                .where(Consultation.appointment_date < end)
                .order_by(Consultation.appointment_date, Consultation.id)
            ).all()
            return [ConsultationRecord.model_validate(c) for c in rows]

    @staticmethod
    def _require_patient(db: Session, patient_id: int) -> None:
        if db.get(Patient, patient_id) is None:
            raise UnknownPatientError(patient_id)
