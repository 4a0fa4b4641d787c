"""ORM models; importing the package registers every mapper."""

from hospital_scheduling.models.appointment import Appointment
from hospital_scheduling.models.base import Base
from hospital_scheduling.models.doctor import Doctor
from hospital_scheduling.models.patient import Patient
from hospital_scheduling.models.status import PENDING_STATUS, AppointmentStatus

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "Base",
    "Doctor",
    "PENDING_STATUS",
    "Patient",
]
