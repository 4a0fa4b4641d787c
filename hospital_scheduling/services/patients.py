"""Patient orchestration operations.

Each operation runs the matching compound validator, then reads from or
writes to the record store. Validation failures propagate unchanged; the
transport layer decides how to render them.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from hospital_scheduling.models import Appointment, Patient
from hospital_scheduling.schemas import PatientCreate, PatientName
from hospital_scheduling.services import validators
from hospital_scheduling.services.errors import (
    ErrorKind,
    OperationResult,
    RecordMissingError,
    ValidationFailure,
)
from hospital_scheduling.services.store import AppointmentRecordStore, PatientRecordStore

LOGGER = logging.getLogger(__name__)

# Update only demonstrates a write; it does not apply caller-supplied changes.
PLACEHOLDER_LAST_NAME = "Jai"


class PatientService:
    def __init__(
        self,
        patients: PatientRecordStore,
        appointments: AppointmentRecordStore,
        *,
        minimum_age: int = validators.DEFAULT_MINIMUM_AGE,
        today: Optional[Callable[[], date]] = None,
    ):
        self.patients = patients
        self.appointments = appointments
        self.minimum_age = minimum_age
        self._today = today or date.today

    def today(self) -> date:
        return self._today()

    # Store-bound existence checks

    def ensure_patient_exists(self, patient_id: Optional[int]) -> bool:
        return validators.validate_id_exists(patient_id, self.patients.list_ids(), entity="patient")

    def ensure_phone_registered(self, phone: str) -> bool:
        return validators.validate_phone_registered(phone, self.patients.list_phone_numbers())

    def _load(self, patient_id: int) -> Patient:
        patient = self.patients.get(patient_id)
        if patient is None:
            raise RecordMissingError(f"Patient {patient_id} passed the existence check but could not be loaded")
        return patient

    # Operations

    def create_patient(self, data: PatientCreate) -> Patient:
        """Validate and persist a new patient, returning the stored record."""

        validators.validate_patient(data)
        validators.validate_dob(data.dob, today=self.today(), minimum_age=self.minimum_age)
        patient = self.patients.save(_patient_from(data))
        LOGGER.info("Created patient id=%s", patient.id)
        return patient

    def fetch_by_id(self, patient_id: Optional[int]) -> Patient:
        self.ensure_patient_exists(patient_id)
        return self._load(patient_id)

    def fetch_all(self) -> Sequence[Patient]:
        return self.patients.list_all()

    def update_patient(self, patient_id: Optional[int]) -> OperationResult[Patient]:
        """Apply the fixed demonstration update to an existing patient.

        Unlike the other operations, a failed existence check is returned in
        the result instead of being raised.
        """

        try:
            self.ensure_patient_exists(patient_id)
        except ValidationFailure as exc:
            LOGGER.info("Update rejected for patient id=%s: %s", patient_id, exc.message)
            return OperationResult.failure(exc)

        patient = self._load(patient_id)
        patient.last_name = PLACEHOLDER_LAST_NAME
        patient = self.patients.save(patient)
        LOGGER.info("Updated patient id=%s", patient.id)
        return OperationResult.success(patient)

    def create_with_appointments(self, data: PatientCreate) -> OperationResult[Patient]:
        """Register a patient together with at least one appointment.

        Validation failures are carried in the returned result.
        """

        try:
            validators.validate_association(data, today=self.today(), minimum_age=self.minimum_age)
        except ValidationFailure as exc:
            LOGGER.info("Patient with appointments rejected: %s", exc.message)
            return OperationResult.failure(exc)

        patient = _patient_from(data)
        status = self.appointments.pending_status()
        for item in data.appointments:
            patient.appointments.append(
                Appointment(
                    appointment_date=item.appointment_date,
                    reason=item.reason,
                    doctor_id=item.doctor_id,
                    status=status,
                )
            )
        patient = self.patients.save(patient)
        LOGGER.info(
            "Created patient id=%s with %d appointments",
            patient.id,
            len(patient.appointments),
        )
        return OperationResult.success(patient)

    def fetch_by_phone(self, phone: Optional[str]) -> Patient:
        validators.validate_phone(phone)
        self.ensure_phone_registered(phone)
        patient = self.patients.get_by_phone(phone)
        if patient is None:
            raise RecordMissingError("Registered phone number could not be loaded")
        return patient

    def fetch_with_appointment_on(self, day: date) -> Sequence[Patient]:
        found = self.patients.list_with_appointment_on(day)
        if not found:
            raise ValidationFailure(ErrorKind.NO_APPOINTMENTS, f"There are no appointments on {day.isoformat()}.")
        return found

    def fetch_between_dates(self, start: date, end: date) -> Sequence[Patient]:
        """Patients born between ``start`` and ``end`` inclusive."""

        validators.validate_date_range(start, end)
        return self.patients.list_by_dob_range(start, end)

    def fetch_ascending(self) -> Sequence[Patient]:
        found = self.patients.list_ascending()
        if not found:
            raise ValidationFailure(ErrorKind.NO_RECORDS, "There are no patient records.")
        return found

    def fetch_name_by_id(self, patient_id: Optional[int]) -> PatientName:
        self.ensure_patient_exists(patient_id)
        name = self.patients.get_name(patient_id)
        if name is None:
            raise RecordMissingError(f"Patient {patient_id} passed the existence check but could not be loaded")
        first_name, last_name = name
        return PatientName(first_name=first_name, last_name=last_name)

    def check_patient(self, data: PatientCreate) -> List[ValidationFailure]:
        return validators.collect_patient_failures(data, today=self.today(), minimum_age=self.minimum_age)


def _patient_from(data: PatientCreate) -> Patient:
    return Patient(
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        email=data.email,
        password=data.password,
        dob=data.dob,
    )
