"""Appointment orchestration operations."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from hospital_scheduling.models import Appointment, Patient
from hospital_scheduling.schemas import AppointmentCreate, AppointmentUpdate, PatientCreate
from hospital_scheduling.services import validators
from hospital_scheduling.services.errors import (
    ErrorKind,
    OperationResult,
    RecordMissingError,
    ValidationFailure,
)
from hospital_scheduling.services.patients import PatientService
from hospital_scheduling.services.store import AppointmentRecordStore

LOGGER = logging.getLogger(__name__)


class AppointmentService:
    """Books, looks up and amends appointments.

    Every new appointment is created with the ``Pending`` status; statuses
    are never transitioned here.
    """

    def __init__(self, appointments: AppointmentRecordStore, patient_service: PatientService):
        self.appointments = appointments
        self.patient_service = patient_service

    def today(self) -> date:
        return self.patient_service.today()

    def ensure_appointment_exists(self, appointment_id: Optional[int]) -> bool:
        return validators.validate_id_exists(appointment_id, self.appointments.list_ids(), entity="appointment")

    def _load(self, appointment_id: int) -> Appointment:
        appointment = self.appointments.get(appointment_id)
        if appointment is None:
            raise RecordMissingError(
                f"Appointment {appointment_id} passed the existence check but could not be loaded"
            )
        return appointment

    def _book(self, patient: Patient, data: AppointmentCreate) -> Appointment:
        appointment = Appointment(
            appointment_date=data.appointment_date,
            reason=data.reason,
            doctor_id=data.doctor_id,
            patient=patient,
            status=self.appointments.pending_status(),
        )
        appointment = self.appointments.save(appointment)
        LOGGER.info(
            "Booked appointment id=%s for patient id=%s on %s",
            appointment.id,
            patient.id,
            appointment.appointment_date,
        )
        return appointment

    def book_with_new_patient(self, patient: PatientCreate, data: AppointmentCreate) -> Appointment:
        """Register ``patient`` and book ``data`` for them.

        The patient is saved before the appointment is checked; undoing that
        write on a later failure is left to the surrounding session scope.
        """

        created = self.patient_service.create_patient(patient)
        validators.validate_booking_date(data.appointment_date, today=self.today())
        validators.validate_reason(data.reason)
        validators.validate_doctor_id(data.doctor_id)
        return self._book(created, data)

    def book_for_patient(self, patient_id: Optional[int], data: AppointmentCreate) -> Appointment:
        patient = self.patient_service.fetch_by_id(patient_id)
        validators.validate_booking_date(data.appointment_date, today=self.today())
        validators.validate_reason(data.reason)
        validators.validate_doctor_id(data.doctor_id)
        return self._book(patient, data)

    def fetch_by_id(self, appointment_id: Optional[int]) -> Appointment:
        self.ensure_appointment_exists(appointment_id)
        return self._load(appointment_id)

    def fetch_all(self) -> Sequence[Appointment]:
        return self.appointments.list_all()

    def update_appointment(
        self, appointment_id: Optional[int], changes: AppointmentUpdate
    ) -> OperationResult[Appointment]:
        """Merge the fields set on ``changes`` into an existing appointment."""

        fields = changes.model_dump(exclude_unset=True)
        try:
            self.ensure_appointment_exists(appointment_id)
            if "appointment_date" in fields:
                validators.validate_booking_date(fields["appointment_date"], today=self.today())
            if "reason" in fields:
                validators.validate_reason(fields["reason"])
        except ValidationFailure as exc:
            LOGGER.info("Update rejected for appointment id=%s: %s", appointment_id, exc.message)
            return OperationResult.failure(exc)

        appointment = self._load(appointment_id)
        for name, value in fields.items():
            setattr(appointment, name, value)
        appointment = self.appointments.save(appointment)
        LOGGER.info("Updated appointment id=%s fields=%s", appointment.id, sorted(fields))
        return OperationResult.success(appointment)

    def fetch_between_dates(self, start: date, end: date) -> Sequence[Appointment]:
        validators.validate_date_range(start, end)
        return self.appointments.list_by_date_range(start, end)

    def fetch_ascending(self) -> Sequence[Appointment]:
        found = self.appointments.list_ascending()
        if not found:
            raise ValidationFailure(ErrorKind.NO_RECORDS, "There are no appointment records.")
        return found

    def count_on_date(self, day: date) -> int:
        return self.appointments.count_on_date(day)
