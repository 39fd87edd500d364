"""Shared fixtures: both storage backends, payload factories and an API client."""
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinicdesk.main import create_app
from clinicdesk.models.base import Base, make_engine
from clinicdesk.schemas import ConsultationCreate, PatientCreate
from clinicdesk.storage import DatabaseStorage, MemStorage


@pytest.fixture()
def db_engine():
    """Isolated in-memory SQLite database shared across threads for one test."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture()
def db_storage(session_factory):
    return DatabaseStorage(session_factory)


@pytest.fixture()
def mem_storage():
    return MemStorage()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Runs the test once per backend."""
    if request.param == "memory":
        return MemStorage()
    return request.getfixturevalue("db_storage")


@pytest.fixture()
def client(storage):
    with TestClient(create_app(storage=storage)) as test_client:
        yield test_client


@pytest.fixture()
def make_patient(storage):
    def _make(**overrides):
        data = {
            "first_name": "Ann",
            "last_name": "Lee",
            "date_of_birth": date(1990, 1, 1),
            "gender": "female",
            "phone_number": "555-1111",
        }
        data.update(overrides)
        return storage.create_patient(PatientCreate(**data))

    return _make


@pytest.fixture()
def make_consultation(storage):
    def _make(patient_id: int, appointment_date: datetime, **overrides):
        data = {
            "patient_id": patient_id,
            "appointment_date": appointment_date,
            "consultation_type": "Routine Checkup",
            "status": "scheduled",
        }
        data.update(overrides)
        return storage.create_consultation(ConsultationCreate(**data))

    return _make
