"""Appointment status lookup table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from hospital_scheduling.models.base import Base

PENDING_STATUS = "Pending"


class AppointmentStatus(Base):
    """Label attached to an appointment when it is created."""

    __tablename__ = "appointment_statuses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    status_name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
