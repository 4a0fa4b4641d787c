"""Domain rules for patients and appointments.

Every validator returns ``True`` when the value is acceptable and raises a
:class:`ValidationFailure` on the first rule it finds violated. Compound
validators chain field validators with ``and`` so evaluation stops at the
first failure.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Iterable, List, Optional

from hospital_scheduling.services.errors import ErrorKind, ValidationFailure

LOGGER = logging.getLogger(__name__)

PHONE_LENGTH = 10
PHONE_LEADING_DIGITS = frozenset("6789")
ASCII_DIGITS = frozenset("0123456789")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 12
NAME_MIN_LENGTH = 2
COMBINED_NAME_MAX_LENGTH = 50
REJECTED_LAST_NAMES = frozenset({"n/a", "unknown"})
REASON_MAX_LENGTH = 50
DEFAULT_MINIMUM_AGE = 18


def _fail(kind: ErrorKind, message: str) -> ValidationFailure:
    return ValidationFailure(kind, message)


def years_before(day: date, years: int) -> date:
    """Return the same calendar day ``years`` earlier, clamping Feb 29 to Feb 28."""

    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


# Field validators


def validate_phone(phone: Optional[str]) -> bool:
    if phone is None or len(phone) != PHONE_LENGTH:
        raise _fail(ErrorKind.PHONE_NUMBER_INVALID, "Phone number must be exactly 10 digits long.")
    if phone[0] not in PHONE_LEADING_DIGITS:
        raise _fail(ErrorKind.PHONE_NUMBER_INVALID, "Phone number must start with 9, 8, 7, or 6.")
    if any(char not in ASCII_DIGITS for char in phone):
        raise _fail(ErrorKind.PHONE_NUMBER_INVALID, "Phone number can only contain digits.")
    return True


def validate_email(email: Optional[str]) -> bool:
    if not email:
        raise _fail(ErrorKind.EMAIL_INVALID, "Email cannot be empty.")
    at_count = email.count("@")
    if at_count == 0:
        raise _fail(ErrorKind.EMAIL_INVALID, "Email must contain an '@' character.")
    if at_count > 1:
        raise _fail(ErrorKind.EMAIL_INVALID, "Email must contain exactly one '@' character.")
    if ".." in email:
        raise _fail(ErrorKind.EMAIL_INVALID, "Email cannot contain consecutive dots.")
    return True


def validate_password(password: Optional[str]) -> bool:
    """Check length bounds, then each required character class in turn."""

    if password is None:
        raise _fail(ErrorKind.PASSWORD_INVALID, "Password cannot be empty.")
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise _fail(
            ErrorKind.PASSWORD_INVALID,
            f"Password length must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters.",
        )

    has_upper = has_lower = has_digit = has_special = False
    for char in password:
        if char.isupper():
            has_upper = True
        elif char.islower():
            has_lower = True
        elif char.isdigit():
            has_digit = True
        else:
            has_special = True

    if not has_upper:
        raise _fail(ErrorKind.PASSWORD_INVALID, "Password must contain at least one uppercase letter.")
    if not has_lower:
        raise _fail(ErrorKind.PASSWORD_INVALID, "Password must contain at least one lowercase letter.")
    if not has_digit:
        raise _fail(ErrorKind.PASSWORD_INVALID, "Password must contain at least one digit.")
    if not has_special:
        raise _fail(ErrorKind.PASSWORD_INVALID, "Password must contain at least one special character.")
    return True


def _validate_name_shape(value: Optional[str], label: str) -> None:
    if not value:
        raise _fail(ErrorKind.NAME_INVALID, f"{label} cannot be empty.")
    if len(value) < NAME_MIN_LENGTH:
        raise _fail(ErrorKind.NAME_INVALID, f"{label} must be at least {NAME_MIN_LENGTH} characters long.")
    if not all(char.isalpha() for char in value):
        raise _fail(ErrorKind.NAME_INVALID, f"{label} can only contain alphabetic characters.")


def validate_first_name(first_name: Optional[str]) -> bool:
    _validate_name_shape(first_name, "First name")
    if first_name.strip() != first_name:
        raise _fail(ErrorKind.NAME_INVALID, "First name cannot have leading or trailing spaces.")
    return True


def validate_last_name(last_name: Optional[str]) -> bool:
    _validate_name_shape(last_name, "Last name")
    if last_name.lower() in REJECTED_LAST_NAMES:
        raise _fail(ErrorKind.NAME_INVALID, "Last name cannot be 'N/A' or 'Unknown'.")
    return True


def validate_combined_name(first_name: Optional[str], last_name: Optional[str]) -> bool:
    combined = f"{first_name or ''} {last_name or ''}"
    if len(combined) > COMBINED_NAME_MAX_LENGTH:
        raise _fail(
            ErrorKind.NAME_INVALID,
            f"Combined first and last name cannot exceed {COMBINED_NAME_MAX_LENGTH} characters.",
        )
    if not all(char.isalpha() or char == " " for char in combined):
        raise _fail(ErrorKind.NAME_INVALID, "Combined first and last name contains invalid characters.")
    if "  " in combined:
        raise _fail(ErrorKind.NAME_INVALID, "Combined first and last name cannot contain consecutive spaces.")
    return True


def validate_dob(
    dob: Optional[date],
    *,
    today: Optional[date] = None,
    minimum_age: int = DEFAULT_MINIMUM_AGE,
) -> bool:
    """Reject future birth dates and anyone not yet past ``minimum_age``.

    A birth date falling exactly on the cut-off day is rejected.
    """

    today = today or date.today()
    if dob is None:
        raise _fail(ErrorKind.DATE_OF_BIRTH_INVALID, "Date of birth cannot be empty.")
    if dob > today:
        raise _fail(ErrorKind.DATE_OF_BIRTH_INVALID, "Date of birth cannot be in the future.")
    if dob >= years_before(today, minimum_age):
        raise _fail(
            ErrorKind.DATE_OF_BIRTH_INVALID,
            f"Patient must be at least {minimum_age} years old.",
        )
    return True


def validate_booking_date(appointment_date: Optional[date], *, today: Optional[date] = None) -> bool:
    today = today or date.today()
    if appointment_date is None:
        raise _fail(ErrorKind.BOOKING_DATE_INVALID, "Appointment date cannot be empty.")
    if appointment_date < today:
        raise _fail(ErrorKind.BOOKING_DATE_INVALID, "Appointment booking date cannot be in the past.")
    return True


def validate_reason(reason: Optional[str]) -> bool:
    if reason is not None and len(reason) > REASON_MAX_LENGTH:
        raise _fail(
            ErrorKind.APPOINTMENT_INVALID,
            f"Reason must be at most {REASON_MAX_LENGTH} characters.",
        )
    return True


def validate_doctor_id(doctor_id: Optional[int]) -> bool:
    if doctor_id is None or doctor_id <= 0:
        raise _fail(ErrorKind.ID_INVALID, "Doctor ID must be a positive number.")
    return True


def validate_date_range(start: date, end: date) -> bool:
    if start > end:
        raise _fail(ErrorKind.DATE_RANGE_INVALID, "Start date must not be after the end date.")
    return True


# Existence validators


def validate_id_exists(record_id: Optional[int], known_ids: Iterable[int], entity: str = "patient") -> bool:
    """Check ``record_id`` against the identifiers the store knows about.

    Membership is checked before positivity; a missing id is rejected up front
    since it can never be a member.
    """

    label = entity.capitalize()
    if record_id is None:
        raise _fail(ErrorKind.ID_INVALID, f"{label} ID cannot be null.")
    if record_id not in set(known_ids):
        raise _fail(ErrorKind.ID_NOT_FOUND, f"{label} ID {record_id} does not exist.")
    if record_id <= 0:
        raise _fail(ErrorKind.ID_INVALID, f"{label} ID must be a positive number.")
    return True


def validate_phone_registered(phone: str, known_phones: Iterable[str]) -> bool:
    if phone not in set(known_phones):
        raise _fail(ErrorKind.PHONE_NOT_REGISTERED, "Patient phone number is not registered.")
    return True


# Compound validators


def validate_patient(patient: Any) -> bool:
    """Phone, email, password, combined name, first name, last name; first failure wins."""

    return (
        validate_phone(patient.phone)
        and validate_email(patient.email)
        and validate_password(patient.password)
        and validate_combined_name(patient.first_name, patient.last_name)
        and validate_first_name(patient.first_name)
        and validate_last_name(patient.last_name)
    )


def validate_appointment_count(appointments: Optional[List[Any]]) -> bool:
    if not appointments:
        raise _fail(ErrorKind.NO_APPOINTMENTS, "At least one appointment must be booked.")
    return True


def validate_association(
    patient: Any,
    *,
    today: Optional[date] = None,
    minimum_age: int = DEFAULT_MINIMUM_AGE,
) -> bool:
    """Validate a patient submitted together with its appointments."""

    appointments = patient.appointments or []
    for appointment in appointments:
        validate_booking_date(appointment.appointment_date, today=today)
        validate_reason(appointment.reason)
        validate_doctor_id(appointment.doctor_id)

    return (
        validate_patient(patient)
        and validate_appointment_count(appointments)
        and validate_dob(patient.dob, today=today, minimum_age=minimum_age)
    )


def collect_patient_failures(
    patient: Any,
    *,
    today: Optional[date] = None,
    minimum_age: int = DEFAULT_MINIMUM_AGE,
) -> List[ValidationFailure]:
    """Run every patient check and return all failures instead of the first."""

    checks: List[Callable[[], bool]] = [
        lambda: validate_phone(patient.phone),
        lambda: validate_email(patient.email),
        lambda: validate_password(patient.password),
        lambda: validate_combined_name(patient.first_name, patient.last_name),
        lambda: validate_first_name(patient.first_name),
        lambda: validate_last_name(patient.last_name),
        lambda: validate_dob(patient.dob, today=today, minimum_age=minimum_age),
    ]

    failures: List[ValidationFailure] = []
    for check in checks:
        try:
            check()
        except ValidationFailure as exc:
            failures.append(exc)

    LOGGER.debug("Collected %d patient validation failures", len(failures))
    return failures
