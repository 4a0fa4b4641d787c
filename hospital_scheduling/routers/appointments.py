"""Appointment endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Union

from fastapi import APIRouter, Depends, status

from hospital_scheduling.routers.dependencies import get_appointment_service
from hospital_scheduling.schemas import (
    AppointmentCreate,
    AppointmentOut,
    AppointmentUpdate,
    BookingWithPatient,
)
from hospital_scheduling.services.appointments import AppointmentService

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AppointmentOut, status_code=status.HTTP_201_CREATED)
def book_with_new_patient(
    payload: BookingWithPatient,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentOut:
    """Register a patient and book their first appointment."""

    LOGGER.info("Booking appointment with new patient details")
    appointment = service.book_with_new_patient(payload.patient, payload.appointment)
    return AppointmentOut.model_validate(appointment)


@router.post(
    "/patients/{patient_id}",
    response_model=AppointmentOut,
    status_code=status.HTTP_201_CREATED,
)
def book_for_patient(
    patient_id: int,
    payload: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentOut:
    """Book an appointment for an existing patient."""

    LOGGER.info("Booking appointment for patient id=%s", patient_id)
    return AppointmentOut.model_validate(service.book_for_patient(patient_id, payload))


@router.get("", response_model=List[AppointmentOut])
def list_appointments(service: AppointmentService = Depends(get_appointment_service)) -> List[AppointmentOut]:
    return [AppointmentOut.model_validate(item) for item in service.fetch_all()]


@router.get("/ascending", response_model=List[AppointmentOut])
def list_appointments_ascending(
    service: AppointmentService = Depends(get_appointment_service),
) -> List[AppointmentOut]:
    return [AppointmentOut.model_validate(item) for item in service.fetch_ascending()]


@router.get("/between", response_model=List[AppointmentOut])
def list_appointments_between(
    start: date,
    end: date,
    service: AppointmentService = Depends(get_appointment_service),
) -> List[AppointmentOut]:
    LOGGER.debug("Fetching appointments between %s and %s", start, end)
    return [AppointmentOut.model_validate(item) for item in service.fetch_between_dates(start, end)]


@router.get("/count/{day}")
def count_appointments_on(
    day: date, service: AppointmentService = Depends(get_appointment_service)
) -> Dict[str, Union[str, int]]:
    return {"date": day.isoformat(), "count": service.count_on_date(day)}


@router.get("/{appointment_id}", response_model=AppointmentOut)
def get_appointment(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
) -> AppointmentOut:
    return AppointmentOut.model_validate(service.fetch_by_id(appointment_id))


@router.put("/{appointment_id}", response_model=AppointmentOut)
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentOut:
    LOGGER.info("Updating appointment id=%s", appointment_id)
    return AppointmentOut.model_validate(service.update_appointment(appointment_id, payload).unwrap())
