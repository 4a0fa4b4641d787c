"""HTTP surface: request mapping and rendering of rejected requests."""

from datetime import date, timedelta
from typing import Any, Dict

import pytest
from httpx import ASGITransport, AsyncClient

from hospital_scheduling.services.validators import years_before


def patient_json(**overrides: Any) -> Dict[str, Any]:
    data = {
        "first_name": "Jo",
        "last_name": "Smith",
        "phone": "9876543210",
        "email": "jo@smith.com",
        "password": "Abcdef1!",
        "dob": years_before(date.today(), 25).isoformat(),
    }
    data.update(overrides)
    return data


def test_create_patient(client) -> None:
    response = client.post("/patients", json=patient_json())

    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["first_name"] == "Jo"
    assert "password" not in body


def test_rejected_patient_renders_bad_request(client) -> None:
    response = client.post("/patients", json=patient_json(phone="12345"))

    assert response.status_code == 400
    assert response.json()["kind"] == "PhoneNumberInvalid"
    assert "10 digits" in response.json()["detail"]


def test_empty_listing_versus_empty_ascending(client) -> None:
    listing = client.get("/patients")
    ascending = client.get("/patients/ascending")

    assert listing.status_code == 200
    assert listing.json() == []
    assert ascending.status_code == 400
    assert ascending.json()["kind"] == "NoRecords"


def test_reversed_birth_date_range(client) -> None:
    response = client.get("/patients/born-between", params={"start": "2000-01-02", "end": "2000-01-01"})

    assert response.status_code == 400
    assert response.json()["kind"] == "DateRangeInvalid"


def test_patient_lookups(client) -> None:
    created = client.post("/patients", json=patient_json()).json()
    patient_id = created["id"]

    assert client.get(f"/patients/{patient_id}").json()["phone"] == "9876543210"
    assert client.get("/patients/by-phone/9876543210").json()["id"] == patient_id
    assert client.get(f"/patients/{patient_id}/name").json() == {"first_name": "Jo", "last_name": "Smith"}

    dob = created["dob"]
    born = client.get("/patients/born-between", params={"start": dob, "end": dob})
    assert [item["id"] for item in born.json()] == [patient_id]


def test_unknown_patient(client) -> None:
    assert client.get("/patients/999").json()["kind"] == "IdNotFound"
    assert client.put("/patients/999").status_code == 400
    assert client.get("/patients/by-phone/9123456789").json()["kind"] == "PhoneNotRegistered"


def test_update_patient(client) -> None:
    patient_id = client.post("/patients", json=patient_json()).json()["id"]

    response = client.put(f"/patients/{patient_id}")

    assert response.status_code == 200
    assert response.json()["last_name"] == "Jai"


def test_create_patient_with_appointments(client) -> None:
    today = date.today().isoformat()
    payload = patient_json(appointments=[{"appointment_date": today, "reason": "Checkup", "doctor_id": 1}])

    response = client.post("/patients/with-appointments", json=payload)

    assert response.status_code == 201
    appointments = response.json()["appointments"]
    assert len(appointments) == 1
    assert appointments[0]["status_name"] == "Pending"

    on_day = client.get(f"/patients/appointment-date/{today}")
    assert [item["id"] for item in on_day.json()] == [response.json()["id"]]


def test_create_patient_without_appointments_is_rejected(client) -> None:
    response = client.post("/patients/with-appointments", json=patient_json())

    assert response.status_code == 400
    assert response.json()["kind"] == "NoAppointments"


def test_validate_reports_all_failures(client) -> None:
    response = client.post("/patients/validate", json=patient_json(email="x", password="short"))

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert [item["kind"] for item in body["failures"]] == ["EmailInvalid", "PasswordInvalid"]
    assert client.get("/patients").json() == []


def test_booking_rejects_non_positive_doctor_id(client) -> None:
    created = client.post("/patients", json=patient_json()).json()

    response = client.post(
        f"/appointments/patients/{created['id']}",
        json={"appointment_date": date.today().isoformat(), "doctor_id": 0},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "IdInvalid"
    assert client.get("/appointments").json() == []


def test_booking_flow(client) -> None:
    today = date.today()
    booking = {
        "patient": patient_json(),
        "appointment": {"appointment_date": today.isoformat(), "reason": "Fever", "doctor_id": 1},
    }

    created = client.post("/appointments", json=booking)
    assert created.status_code == 201
    appointment = created.json()
    assert appointment["status_name"] == "Pending"

    second = client.post(
        f"/appointments/patients/{appointment['patient_id']}",
        json={"appointment_date": (today + timedelta(days=2)).isoformat(), "doctor_id": 1},
    )
    assert second.status_code == 201

    assert len(client.get("/appointments").json()) == 2
    assert client.get(f"/appointments/count/{today.isoformat()}").json() == {"date": today.isoformat(), "count": 1}
    assert client.get(f"/appointments/{appointment['id']}").json()["reason"] == "Fever"

    ascending = client.get("/appointments/ascending").json()
    assert [item["id"] for item in ascending] == [appointment["id"], second.json()["id"]]

    between = client.get(
        "/appointments/between",
        params={"start": today.isoformat(), "end": today.isoformat()},
    )
    assert [item["id"] for item in between.json()] == [appointment["id"]]

    updated = client.put(f"/appointments/{appointment['id']}", json={"reason": "Follow-up"})
    assert updated.status_code == 200
    assert updated.json()["reason"] == "Follow-up"
    assert updated.json()["appointment_date"] == today.isoformat()


def test_failed_booking_rolls_back_the_new_patient(client) -> None:
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    booking = {
        "patient": patient_json(),
        "appointment": {"appointment_date": yesterday, "doctor_id": 1},
    }

    response = client.post("/appointments", json=booking)

    assert response.status_code == 400
    assert response.json()["kind"] == "BookingDateInvalid"
    assert client.get("/patients").json() == []


def test_unknown_appointment(client) -> None:
    assert client.get("/appointments/12").json()["kind"] == "IdNotFound"
    assert client.put("/appointments/12", json={"reason": "x"}).json()["kind"] == "IdNotFound"
    assert client.get("/appointments/ascending").json()["kind"] == "NoRecords"


@pytest.mark.anyio
async def test_async_client_sees_validation_errors(client) -> None:
    transport = ASGITransport(app=client.app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        response = await async_client.post("/patients", json=patient_json(email="a@@b.com"))

    assert response.status_code == 400
    assert response.json() == {
        "detail": "Email must contain exactly one '@' character.",
        "kind": "EmailInvalid",
    }
