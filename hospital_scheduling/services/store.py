"""Record store contracts and their SQLAlchemy implementations."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Protocol, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hospital_scheduling.models import PENDING_STATUS, Appointment, AppointmentStatus, Patient

LOGGER = logging.getLogger(__name__)


class PatientRecordStore(Protocol):
    """Lookups and writes the patient rules rely on."""

    def get(self, patient_id: int) -> Optional[Patient]: ...

    def list_all(self) -> Sequence[Patient]: ...

    def list_ids(self) -> List[int]: ...

    def list_phone_numbers(self) -> List[str]: ...

    def get_by_phone(self, phone: str) -> Optional[Patient]: ...

    def list_by_dob_range(self, start: date, end: date) -> Sequence[Patient]: ...

    def list_with_appointment_on(self, day: date) -> Sequence[Patient]: ...

    def list_ascending(self) -> Sequence[Patient]: ...

    def get_name(self, patient_id: int) -> Optional[Tuple[str, str]]: ...

    def save(self, patient: Patient) -> Patient: ...


class AppointmentRecordStore(Protocol):
    """Lookups and writes the appointment rules rely on."""

    def get(self, appointment_id: int) -> Optional[Appointment]: ...

    def list_all(self) -> Sequence[Appointment]: ...

    def list_ids(self) -> List[int]: ...

    def list_by_date_range(self, start: date, end: date) -> Sequence[Appointment]: ...

    def list_ascending(self) -> Sequence[Appointment]: ...

    def count_on_date(self, day: date) -> int: ...

    def pending_status(self) -> AppointmentStatus: ...

    def save(self, appointment: Appointment) -> Appointment: ...


class SqlPatientStore:
    """Patient store backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, patient_id: int) -> Optional[Patient]:
        return self.session.get(Patient, patient_id)

    def list_all(self) -> Sequence[Patient]:
        return self.session.scalars(select(Patient).order_by(Patient.id)).all()

    def list_ids(self) -> List[int]:
        return list(self.session.scalars(select(Patient.id)))

    def list_phone_numbers(self) -> List[str]:
        return list(self.session.scalars(select(Patient.phone)))

    def get_by_phone(self, phone: str) -> Optional[Patient]:
        return self.session.scalars(select(Patient).where(Patient.phone == phone)).first()

    def list_by_dob_range(self, start: date, end: date) -> Sequence[Patient]:
        q = select(Patient).where(Patient.dob.between(start, end)).order_by(Patient.dob, Patient.id)
        return self.session.scalars(q).all()

    def list_with_appointment_on(self, day: date) -> Sequence[Patient]:
        q = (
            select(Patient)
            .join(Patient.appointments)
            .where(Appointment.appointment_date == day)
            .distinct()
            .order_by(Patient.id)
        )
        return self.session.scalars(q).all()

    def list_ascending(self) -> Sequence[Patient]:
        q = select(Patient).order_by(Patient.first_name, Patient.last_name, Patient.id)
        return self.session.scalars(q).all()

    def get_name(self, patient_id: int) -> Optional[Tuple[str, str]]:
        row = self.session.execute(
            select(Patient.first_name, Patient.last_name).where(Patient.id == patient_id)
        ).first()
        return (row.first_name, row.last_name) if row else None

    def save(self, patient: Patient) -> Patient:
        self.session.add(patient)
        self.session.flush()
        self.session.refresh(patient)
        LOGGER.debug("Saved patient id=%s", patient.id)
        return patient


class SqlAppointmentStore:
    """Appointment store backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, appointment_id: int) -> Optional[Appointment]:
        return self.session.get(Appointment, appointment_id)

    def list_all(self) -> Sequence[Appointment]:
        return self.session.scalars(select(Appointment).order_by(Appointment.id)).all()

    def list_ids(self) -> List[int]:
        return list(self.session.scalars(select(Appointment.id)))

    def list_by_date_range(self, start: date, end: date) -> Sequence[Appointment]:
        q = (
            select(Appointment)
            .where(Appointment.appointment_date.between(start, end))
            .order_by(Appointment.appointment_date, Appointment.id)
        )
        return self.session.scalars(q).all()

    def list_ascending(self) -> Sequence[Appointment]:
        q = select(Appointment).order_by(Appointment.appointment_date, Appointment.id)
        return self.session.scalars(q).all()

    def count_on_date(self, day: date) -> int:
        q = select(func.count(Appointment.id)).where(Appointment.appointment_date == day)
        return self.session.scalar(q) or 0

    def pending_status(self) -> AppointmentStatus:
        status = self.session.scalars(
            select(AppointmentStatus).where(AppointmentStatus.status_name == PENDING_STATUS)
        ).first()
        if status is None:
            status = AppointmentStatus(status_name=PENDING_STATUS)
            self.session.add(status)
            self.session.flush()
        return status

    def save(self, appointment: Appointment) -> Appointment:
        self.session.add(appointment)
        self.session.flush()
        self.session.refresh(appointment)
        LOGGER.debug("Saved appointment id=%s", appointment.id)
        return appointment
