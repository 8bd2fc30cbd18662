from datetime import date

import pytest
from fastapi import HTTPException
from sqlalchemy import func, select

from src.core.exceptions import ValidationError
from src.modules.appointments.booking import BookingForm
from src.modules.appointments.models import Appointment
from src.modules.appointments.schemas import AppointmentCreate, AppointmentUpdate
from src.modules.appointments.service import AppointmentService
from src.modules.providers.models import DoctorAvailability
from src.shared.enums import AppointmentStatus, AvailabilityCategory, UserRole
from src.shared.ulid import generate_ulid
from tests.helpers import auth_headers, make_user

# 2030-06-03 is a Monday.
TODAY = date(2030, 6, 3)
TUESDAY = date(2030, 6, 4)
SATURDAY = date(2030, 6, 8)


@pytest.fixture(autouse=True)
def frozen_today(monkeypatch):
    monkeypatch.setattr(BookingForm, "_today", lambda self: TODAY)


async def _weekday_doctor(db_session, full_name="Dr. House"):
    doctor = await make_user(db_session, UserRole.DOCTOR, full_name=full_name, phone="555-0100")
    db_session.add(DoctorAvailability(doctor_id=doctor.user_id, availability_type=AvailabilityCategory.WEEKDAYS))
    await db_session.commit()
    return doctor


async def _count_appointments(db_session) -> int:
    return (await db_session.execute(select(func.count(Appointment.appointment_id)))).scalar_one()


@pytest.mark.asyncio
async def test_service_books_pending_appointment(db_session, cache):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT, full_name="Pat")
    service = AppointmentService(db_session, cache)

    appointment = await service.book(
        AppointmentCreate(doctor_id=doctor.user_id, appointment_date=TUESDAY, reason="Fever", status="completed"),
        patient,
    )

    assert appointment.status == AppointmentStatus.PENDING
    assert appointment.patient_id == patient.user_id
    assert appointment.doctor_id == doctor.user_id
    assert cache.invalidated == ["appointments"]


@pytest.mark.asyncio
async def test_service_rejects_weekend_for_weekday_doctor(db_session, cache):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT)
    service = AppointmentService(db_session, cache)

    with pytest.raises(ValidationError) as excinfo:
        await service.book(
            AppointmentCreate(doctor_id=doctor.user_id, appointment_date=SATURDAY, reason="Fever"),
            patient,
        )
    assert excinfo.value.detail == "Doctor is not available on this day"
    assert await _count_appointments(db_session) == 0


@pytest.mark.asyncio
async def test_book_over_http(client, db_session):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT)

    resp = await client.post(
        "/api/v1/appointments",
        json={
            "doctor_id": doctor.user_id,
            "appointment_date": TUESDAY.isoformat(),
            "reason": "Back pain",
            "status": "confirmed",
        },
        headers=auth_headers(patient),
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["appointment_date"] == TUESDAY.isoformat()
    assert "id" in body


@pytest.mark.asyncio
async def test_book_over_http_reports_missing_fields(client, db_session):
    patient = await make_user(db_session, UserRole.PATIENT)

    resp = await client.post("/api/v1/appointments", json={"reason": ""}, headers=auth_headers(patient))

    assert resp.status_code == 422
    assert resp.json() == {"success": False, "message": "Please fill all fields"}
    assert await _count_appointments(db_session) == 0


@pytest.mark.asyncio
async def test_book_over_http_rejects_unavailable_day(client, db_session):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT)

    resp = await client.post(
        "/api/v1/appointments",
        json={"doctor_id": doctor.user_id, "appointment_date": SATURDAY.isoformat(), "reason": "Checkup"},
        headers=auth_headers(patient),
    )

    assert resp.status_code == 422
    assert resp.json()["message"] == "Doctor is not available on this day"


@pytest.mark.asyncio
async def test_only_patients_can_book(client, db_session):
    doctor = await _weekday_doctor(db_session)

    resp = await client.post(
        "/api/v1/appointments",
        json={"doctor_id": doctor.user_id, "appointment_date": TUESDAY.isoformat(), "reason": "Checkup"},
        headers=auth_headers(doctor),
    )

    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_patient_and_doctor_listings(client, db_session):
    doctor = await _weekday_doctor(db_session, full_name="Dr. Strange")
    patient = await make_user(db_session, UserRole.PATIENT, full_name="Peter", phone="555-0199")
    db_session.add_all(
        [
            Appointment(
                appointment_id=generate_ulid(),
                patient_id=patient.user_id,
                doctor_id=doctor.user_id,
                appointment_date=date(2030, 6, 10),
                reason="Follow up",
            ),
            Appointment(
                appointment_id=generate_ulid(),
                patient_id=patient.user_id,
                doctor_id=doctor.user_id,
                appointment_date=TUESDAY,
                reason="First visit",
                status=AppointmentStatus.CONFIRMED,
            ),
        ]
    )
    await db_session.commit()

    mine = await client.get("/api/v1/appointments/me", headers=auth_headers(patient))
    assert mine.status_code == 200
    assert [item["reason"] for item in mine.json()] == ["Follow up", "First visit"]
    assert mine.json()[0]["doctor_name"] == "Dr. Strange"

    schedule = await client.get("/api/v1/appointments/doctor", headers=auth_headers(doctor))
    assert schedule.status_code == 200
    items = schedule.json()
    assert [item["reason"] for item in items] == ["First visit", "Follow up"]
    assert items[0]["patient_name"] == "Peter"
    assert items[0]["patient_phone"] == "555-0199"
    assert [item["can_update_status"] for item in items] == [False, True]


@pytest.mark.asyncio
async def test_doctor_updates_status_of_own_appointment(client, db_session, cache):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT)
    appointment = Appointment(
        appointment_id=generate_ulid(),
        patient_id=patient.user_id,
        doctor_id=doctor.user_id,
        appointment_date=TUESDAY,
        reason="Checkup",
    )
    db_session.add(appointment)
    await db_session.commit()

    resp = await client.patch(
        f"/api/v1/appointments/doctor/{appointment.appointment_id}",
        json={"status": "confirmed", "notes": "Bring previous scans"},
        headers=auth_headers(doctor),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "confirmed"
    assert body["notes"] == "Bring previous scans"
    assert body["can_update_status"] is False
    assert cache.invalidated == ["appointments"]


@pytest.mark.asyncio
async def test_doctor_cannot_touch_another_doctors_appointment(db_session, cache):
    doctor = await _weekday_doctor(db_session)
    other = await _weekday_doctor(db_session, full_name="Dr. Other")
    patient = await make_user(db_session, UserRole.PATIENT)
    appointment = Appointment(
        appointment_id=generate_ulid(),
        patient_id=patient.user_id,
        doctor_id=doctor.user_id,
        appointment_date=TUESDAY,
        reason="Checkup",
    )
    db_session.add(appointment)
    await db_session.commit()

    service = AppointmentService(db_session, cache)
    with pytest.raises(HTTPException) as excinfo:
        await service.update_for_doctor(
            appointment.appointment_id,
            AppointmentUpdate(status=AppointmentStatus.CANCELLED),
            other,
        )
    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_admin_lists_all_appointments(client, db_session):
    doctor = await _weekday_doctor(db_session)
    patient = await make_user(db_session, UserRole.PATIENT)
    admin = await make_user(db_session, UserRole.HOSPITAL_ADMIN)
    db_session.add(
        Appointment(
            appointment_id=generate_ulid(),
            patient_id=patient.user_id,
            doctor_id=doctor.user_id,
            appointment_date=TUESDAY,
            reason="Checkup",
        )
    )
    await db_session.commit()

    resp = await client.get("/api/v1/admin/appointments", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert len(resp.json()) == 1

    denied = await client.get("/api/v1/admin/appointments", headers=auth_headers(patient))
    assert denied.status_code == 403
