"""Domain error taxonomy and the result wrapper used by orchestration operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Every way a domain rule can reject a request."""

    PHONE_NUMBER_INVALID = "PhoneNumberInvalid"
    EMAIL_INVALID = "EmailInvalid"
    PASSWORD_INVALID = "PasswordInvalid"
    NAME_INVALID = "NameInvalid"
    DATE_OF_BIRTH_INVALID = "DateOfBirthInvalid"
    BOOKING_DATE_INVALID = "BookingDateInvalid"
    APPOINTMENT_INVALID = "AppointmentInvalid"
    ID_INVALID = "IdInvalid"
    ID_NOT_FOUND = "IdNotFound"
    PHONE_NOT_REGISTERED = "PhoneNotRegistered"
    NO_APPOINTMENTS = "NoAppointments"
    NO_RECORDS = "NoRecords"
    DATE_RANGE_INVALID = "DateRangeInvalid"


class ValidationFailure(Exception):
    """A violated domain rule, tagged with its kind."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationFailure(kind={self.kind.value!r}, message={self.message!r})"


class RecordMissingError(LookupError):
    """Raised when the store misses a record that already passed an existence check."""


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Success or failure of an operation that does not raise on validation errors.

    Callers pick the shape they need: ``value_or_none()`` for the nullable
    form or ``unwrap()`` to get the failure raised.
    """

    value: Optional[T] = None
    error: Optional[ValidationFailure] = None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ValidationFailure) -> "OperationResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or_none(self) -> Optional[T]:
        return self.value if self.ok else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
