"""Service factories resolved per request."""

from fastapi import Depends
from sqlalchemy.orm import Session

from hospital_scheduling.services.appointments import AppointmentService
from hospital_scheduling.services.db import get_db
from hospital_scheduling.services.patients import PatientService
from hospital_scheduling.services.store import SqlAppointmentStore, SqlPatientStore
from hospital_scheduling.utils.config import Settings, get_settings


def get_patient_service(
    session: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PatientService:
    return PatientService(
        SqlPatientStore(session),
        SqlAppointmentStore(session),
        minimum_age=settings.minimum_patient_age,
    )


def get_appointment_service(
    session: Session = Depends(get_db),
    patient_service: PatientService = Depends(get_patient_service),
) -> AppointmentService:
    return AppointmentService(SqlAppointmentStore(session), patient_service)
