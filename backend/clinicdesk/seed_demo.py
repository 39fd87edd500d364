"""
Demo data seeder for ClinicDesk.

Gives an empty store one patient with a consultation at noon today so the
dashboard and today's schedule have something to show on first start.
Only runs against an empty store, so it is safe to call on every startup.
"""
import logging
from datetime import date, datetime, time

from .models.consultation import ConsultationStatus
from .models.patient import Gender
from .schemas import ConsultationCreate, PatientCreate, PatientRecord
from .storage import Storage

logger = logging.getLogger(__name__)

DEMO_PATIENT_PHONE = "555-0100"


def seed_demo_data(storage: Storage) -> None:
    """Create the demo patient and today's consultation if the store is empty."""
    if storage.list_patients():
        logger.debug("Store already has patients, skipping demo seed")
        return

    patient = _seed_patient(storage)
    _seed_consultation(storage, patient)


# ── helpers ──────────────────────────────────────────────────────────────────

def _seed_patient(storage: Storage) -> PatientRecord:
    patient = storage.create_patient(
        PatientCreate(
            first_name="John",
            last_name="Demo",
            date_of_birth=date(1960, 6, 15),
            gender=Gender.MALE,
            phone_number=DEMO_PATIENT_PHONE,
            email="john.demo@example.com",
            blood_type="O+",
            allergies="Penicillin",
        )
    )
    logger.info("Created demo patient: %s %s (id: %s)", patient.first_name, patient.last_name, patient.id)
    return patient


def _seed_consultation(storage: Storage, patient: PatientRecord) -> None:
    consultation = storage.create_consultation(
        ConsultationCreate(
            patient_id=patient.id,
            appointment_date=datetime.combine(date.today(), time(12, 0)),
            consultation_type="Routine Checkup",
            status=ConsultationStatus.SCHEDULED,
            notes="Pre-seeded demo consultation.",
        )
    )
    logger.info("Created demo consultation at %s (id: %s)", consultation.appointment_date, consultation.id)
