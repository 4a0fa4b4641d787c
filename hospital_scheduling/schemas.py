"""Request and response payloads exchanged with the transport layer.

Inbound fields are deliberately loose (mostly optional strings) so that the
domain validators, not pydantic, decide what is acceptable and report it with
the matching error kind.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AppointmentCreate(BaseModel):
    """Appointment details submitted for booking."""

    appointment_date: Optional[date] = None
    reason: Optional[str] = None
    doctor_id: int


class AppointmentUpdate(BaseModel):
    """Fields of an appointment that may be changed; unset fields are left alone."""

    appointment_date: Optional[date] = None
    reason: Optional[str] = None


class PatientCreate(BaseModel):
    """Patient registration payload, optionally carrying appointments."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    dob: Optional[date] = None
    appointments: List[AppointmentCreate] = Field(default_factory=list)


class BookingWithPatient(BaseModel):
    """Register a new patient and book their first appointment."""

    patient: PatientCreate
    appointment: AppointmentCreate


class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    reason: Optional[str] = None
    status_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PatientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    phone: str
    email: str
    dob: date
    created_at: datetime
    updated_at: datetime


class PatientWithAppointmentsOut(PatientOut):
    appointments: List[AppointmentOut] = Field(default_factory=list)


class PatientName(BaseModel):
    first_name: str
    last_name: str


class ValidationFailureOut(BaseModel):
    kind: str
    message: str


class ValidationReport(BaseModel):
    """Every rule a patient payload breaks, for form-style feedback."""

    valid: bool
    failures: List[ValidationFailureOut] = Field(default_factory=list)
