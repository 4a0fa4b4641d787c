"""Patient endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, status

from hospital_scheduling.routers.dependencies import get_patient_service
from hospital_scheduling.schemas import (
    PatientCreate,
    PatientName,
    PatientOut,
    PatientWithAppointmentsOut,
    ValidationFailureOut,
    ValidationReport,
)
from hospital_scheduling.services.patients import PatientService

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=PatientOut, status_code=status.HTTP_201_CREATED)
def create_patient(payload: PatientCreate, service: PatientService = Depends(get_patient_service)) -> PatientOut:
    """Register a new patient."""

    LOGGER.info("Creating patient account")
    return PatientOut.model_validate(service.create_patient(payload))


@router.post("/validate", response_model=ValidationReport)
def validate_patient(
    payload: PatientCreate, service: PatientService = Depends(get_patient_service)
) -> ValidationReport:
    """Report every rule the payload breaks without saving anything."""

    failures = service.check_patient(payload)
    return ValidationReport(
        valid=not failures,
        failures=[ValidationFailureOut(kind=item.kind.value, message=item.message) for item in failures],
    )


@router.post(
    "/with-appointments",
    response_model=PatientWithAppointmentsOut,
    status_code=status.HTTP_201_CREATED,
)
def create_patient_with_appointments(
    payload: PatientCreate, service: PatientService = Depends(get_patient_service)
) -> PatientWithAppointmentsOut:
    """Register a patient together with their appointments."""

    LOGGER.info("Creating patient account with %d appointments", len(payload.appointments))
    patient = service.create_with_appointments(payload).unwrap()
    return PatientWithAppointmentsOut.model_validate(patient)


@router.get("", response_model=List[PatientOut])
def list_patients(service: PatientService = Depends(get_patient_service)) -> List[PatientOut]:
    return [PatientOut.model_validate(item) for item in service.fetch_all()]


@router.get("/ascending", response_model=List[PatientOut])
def list_patients_ascending(service: PatientService = Depends(get_patient_service)) -> List[PatientOut]:
    return [PatientOut.model_validate(item) for item in service.fetch_ascending()]


@router.get("/born-between", response_model=List[PatientOut])
def list_patients_born_between(
    start: date,
    end: date,
    service: PatientService = Depends(get_patient_service),
) -> List[PatientOut]:
    LOGGER.debug("Fetching patients born between %s and %s", start, end)
    return [PatientOut.model_validate(item) for item in service.fetch_between_dates(start, end)]


@router.get("/appointment-date/{day}", response_model=List[PatientOut])
def list_patients_with_appointment_on(
    day: date, service: PatientService = Depends(get_patient_service)
) -> List[PatientOut]:
    return [PatientOut.model_validate(item) for item in service.fetch_with_appointment_on(day)]


@router.get("/by-phone/{phone}", response_model=PatientOut)
def get_patient_by_phone(phone: str, service: PatientService = Depends(get_patient_service)) -> PatientOut:
    return PatientOut.model_validate(service.fetch_by_phone(phone))


@router.get("/{patient_id}", response_model=PatientOut)
def get_patient(patient_id: int, service: PatientService = Depends(get_patient_service)) -> PatientOut:
    return PatientOut.model_validate(service.fetch_by_id(patient_id))


@router.get("/{patient_id}/name", response_model=PatientName)
def get_patient_name(patient_id: int, service: PatientService = Depends(get_patient_service)) -> PatientName:
    return service.fetch_name_by_id(patient_id)


@router.put("/{patient_id}", response_model=PatientOut)
def update_patient(patient_id: int, service: PatientService = Depends(get_patient_service)) -> PatientOut:
    """Apply the fixed demonstration update to a patient."""

    LOGGER.info("Updating patient id=%s", patient_id)
    return PatientOut.model_validate(service.update_patient(patient_id).unwrap())
