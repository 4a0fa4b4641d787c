"""Shared fixtures: an in-memory SQLite store and services with a pinned clock."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from datetime import date
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from hospital_scheduling.models import Doctor
from hospital_scheduling.schemas import AppointmentCreate, PatientCreate
from hospital_scheduling.services.appointments import AppointmentService
from hospital_scheduling.services.db import build_engine, get_db, init_db
from hospital_scheduling.services.patients import PatientService
from hospital_scheduling.services.store import SqlAppointmentStore, SqlPatientStore
from hospital_scheduling.services.validators import years_before

TODAY = date(2026, 10, 19)


def patient_payload(**overrides: Any) -> PatientCreate:
    data = {
        "first_name": "Jo",
        "last_name": "Smith",
        "phone": "9876543210",
        "email": "jo@smith.com",
        "password": "Abcdef1!",
        "dob": years_before(TODAY, 25),
    }
    data.update(overrides)
    return PatientCreate(**data)


def appointment_payload(doctor_id: int, **overrides: Any) -> AppointmentCreate:
    data = {"appointment_date": TODAY, "reason": "Checkup", "doctor_id": doctor_id}
    data.update(overrides)
    return AppointmentCreate(**data)


@pytest.fixture()
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Iterator[Session]:
    session = sessionmaker(bind=engine, autoflush=False, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def doctor(session: Session) -> Doctor:
    doctor = Doctor(name="Dr. Rao", specialization="Cardiology")
    session.add(doctor)
    session.flush()
    return doctor


@pytest.fixture()
def patient_store(session: Session) -> SqlPatientStore:
    return SqlPatientStore(session)


@pytest.fixture()
def appointment_store(session: Session) -> SqlAppointmentStore:
    return SqlAppointmentStore(session)


@pytest.fixture()
def patient_service(patient_store, appointment_store) -> PatientService:
    return PatientService(patient_store, appointment_store, today=lambda: TODAY)


@pytest.fixture()
def appointment_service(appointment_store, patient_service) -> AppointmentService:
    return AppointmentService(appointment_store, patient_service)


@pytest.fixture()
def client(engine) -> Iterator[TestClient]:
    from hospital_scheduling.main import app

    testing_session = sessionmaker(bind=engine, autoflush=False, future=True)

    def override_get_db() -> Iterator[Session]:
        session = testing_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    with testing_session() as session:
        session.add(Doctor(name="Dr. Iyer"))
        session.commit()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
