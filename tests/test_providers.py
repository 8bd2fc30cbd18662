from datetime import date

import pytest

from src.modules.providers import router as providers_router
from src.modules.providers.models import DoctorAvailability
from src.modules.providers.service import ProviderDirectory
from src.shared.enums import AvailabilityCategory, UserRole
from tests.helpers import auth_headers, make_user

TODAY = date(2030, 6, 3)


@pytest.mark.asyncio
async def test_directory_lists_active_doctors_only(db_session):
    await make_user(db_session, UserRole.DOCTOR, full_name="Dr. Zed")
    await make_user(db_session, UserRole.DOCTOR, full_name="Dr. Adams")
    await make_user(db_session, UserRole.DOCTOR, full_name="Dr. Gone", is_active=False)
    await make_user(db_session, UserRole.PATIENT, full_name="Not A Doctor")

    options = await ProviderDirectory(db_session).list_providers()

    assert [option.display_name for option in options] == ["Dr. Adams", "Dr. Zed"]
    assert all(option.availability is AvailabilityCategory.ALL for option in options)


@pytest.mark.asyncio
async def test_set_availability_upserts(db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR)
    directory = ProviderDirectory(db_session)

    first = await directory.set_availability(doctor.user_id, AvailabilityCategory.WEEKENDS)
    second = await directory.set_availability(doctor.user_id, AvailabilityCategory.WEEKDAYS)

    assert first.availability is AvailabilityCategory.WEEKENDS
    assert second.availability is AvailabilityCategory.WEEKDAYS
    record = await db_session.get(DoctorAvailability, doctor.user_id)
    assert record.availability_type is AvailabilityCategory.WEEKDAYS


@pytest.mark.asyncio
async def test_list_providers_endpoint(client, db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR, full_name="Dr. Who")
    db_session.add(DoctorAvailability(doctor_id=doctor.user_id, availability_type=AvailabilityCategory.WEEKENDS))
    await db_session.commit()

    resp = await client.get("/api/v1/providers")

    assert resp.status_code == 200
    assert resp.json() == [{"id": doctor.user_id, "display_name": "Dr. Who", "availability": "weekends"}]


@pytest.mark.asyncio
async def test_calendar_endpoint_marks_selectable_days(client, db_session, monkeypatch):
    monkeypatch.setattr(providers_router, "today", lambda: TODAY)
    doctor = await make_user(db_session, UserRole.DOCTOR)
    db_session.add(DoctorAvailability(doctor_id=doctor.user_id, availability_type=AvailabilityCategory.WEEKDAYS))
    await db_session.commit()

    resp = await client.get(
        f"/api/v1/providers/{doctor.user_id}/calendar",
        params={"start": "2030-06-01", "days": 9},
    )

    assert resp.status_code == 200
    cells = resp.json()
    assert [cell["date"] for cell in cells][:3] == ["2030-06-01", "2030-06-02", "2030-06-03"]
    assert [cell["selectable"] for cell in cells] == [False, False, True, True, True, True, True, False, False]
    assert cells[0]["weekday"] == "saturday"


@pytest.mark.asyncio
async def test_calendar_for_unknown_doctor(client):
    resp = await client.get("/api/v1/providers/missing/calendar")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_calendar_rejects_out_of_range_days(client, db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR)
    resp = await client.get(f"/api/v1/providers/{doctor.user_id}/calendar", params={"days": 500})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_doctor_sets_own_availability(client, db_session, cache):
    doctor = await make_user(db_session, UserRole.DOCTOR)

    resp = await client.put(
        "/api/v1/providers/me/availability",
        json={"availability": "weekdays"},
        headers=auth_headers(doctor),
    )

    assert resp.status_code == 200
    assert resp.json()["availability"] == "weekdays"
    assert cache.invalidated == ["providers"]


@pytest.mark.asyncio
async def test_availability_rejects_unknown_category(client, db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR)

    resp = await client.put(
        "/api/v1/providers/me/availability",
        json={"availability": "holidays"},
        headers=auth_headers(doctor),
    )

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_admin_sets_doctor_availability(client, db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR)
    admin = await make_user(db_session, UserRole.HOSPITAL_ADMIN)

    resp = await client.put(
        f"/api/v1/admin/providers/{doctor.user_id}/availability",
        json={"availability": "weekends"},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["availability"] == "weekends"

    missing = await client.put(
        "/api/v1/admin/providers/nobody/availability",
        json={"availability": "weekends"},
        headers=auth_headers(admin),
    )
    assert missing.status_code == 404
