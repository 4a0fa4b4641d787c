"""Appointment model definition."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hospital_scheduling.models.base import Base

if TYPE_CHECKING:
    from hospital_scheduling.models.doctor import Doctor
    from hospital_scheduling.models.patient import Patient
    from hospital_scheduling.models.status import AppointmentStatus


class Appointment(Base):
    """Represents a patient's booking with a doctor on a given day."""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(
        ForeignKey("patients.id"),
        nullable=False,
    )
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("doctors.id"),
        nullable=False,
    )
    status_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("appointment_statuses.id"),
        nullable=True,
    )
    appointment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    patient: Mapped["Patient"] = relationship(back_populates="appointments")
    doctor: Mapped["Doctor"] = relationship(back_populates="appointments")
    status: Mapped[Optional["AppointmentStatus"]] = relationship()

    @property
    def status_name(self) -> Optional[str]:
        return self.status.status_name if self.status else None
