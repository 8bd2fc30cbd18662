import pytest
from pydantic import ValidationError

from src.core.config import settings
from src.modules.dashboard.schemas import DashboardKind
from src.modules.dashboard.service import DashboardState, ROLE_VIEWS, resolve_dashboard
from src.shared.enums import UserRole
from tests.helpers import auth_headers, make_user

SIGN_IN = "/api/v1/auth/login"


def test_loading_wins_over_everything():
    view = resolve_dashboard(DashboardState(is_loading=True, identity="u1", role="doctor"), SIGN_IN)
    assert view.kind is DashboardKind.LOADING
    assert view.tiles == ()


def test_anonymous_user_is_sent_to_sign_in():
    view = resolve_dashboard(DashboardState(is_loading=False), SIGN_IN)
    assert view.kind is DashboardKind.UNAUTHENTICATED
    assert view.redirect_to == SIGN_IN


@pytest.mark.parametrize("role", [None, "", "janitor"])
def test_missing_or_unknown_role_is_unassigned(role):
    view = resolve_dashboard(DashboardState(is_loading=False, identity="u1", role=role), SIGN_IN)
    assert view.kind is DashboardKind.UNASSIGNED
    assert view.title == "Role Not Assigned"
    assert view.message == "Please contact an administrator to assign your role."


@pytest.mark.parametrize(
    ("role", "kind", "tiles"),
    [
        ("patient", DashboardKind.PATIENT, ["Book Appointment", "Medicine Shop", "Medicine Reminders", "My Appointments"]),
        ("doctor", DashboardKind.DOCTOR, ["My Appointments", "Patient Records", "Prescriptions", "My Availability"]),
        ("hospital_admin", DashboardKind.HOSPITAL_ADMIN, ["User Management", "Doctor Availability", "Analytics"]),
        ("pharmacist_admin", DashboardKind.PHARMACIST_ADMIN, ["Medicine Inventory", "Purchases"]),
    ],
)
def test_each_role_gets_its_own_view(role, kind, tiles):
    view = resolve_dashboard(DashboardState(is_loading=False, identity="u1", role=role), SIGN_IN)
    assert view.kind is kind
    assert [tile.title for tile in view.tiles] == tiles


def test_every_role_has_a_view():
    assert set(ROLE_VIEWS) == set(UserRole)


def test_shared_views_cannot_be_mutated_between_requests():
    view = resolve_dashboard(DashboardState(is_loading=False, identity="u1", role="patient"), SIGN_IN)
    assert isinstance(view.tiles, tuple)

    with pytest.raises(ValidationError):
        view.title = "Hijacked"
    with pytest.raises(ValidationError):
        view.tiles[0].path = "/elsewhere"
    with pytest.raises(AttributeError):
        view.tiles.append(view.tiles[0])

    again = resolve_dashboard(DashboardState(is_loading=False, identity="u2", role="patient"), SIGN_IN)
    assert again.title == "Welcome, Patient"
    assert len(again.tiles) == 4


@pytest.mark.asyncio
async def test_dashboard_redirects_anonymous_callers(client):
    resp = await client.get("/api/v1/dashboard", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == settings.sign_in_path


@pytest.mark.asyncio
async def test_dashboard_for_user_without_role(client, db_session):
    user = await make_user(db_session, None)
    resp = await client.get("/api/v1/dashboard", headers=auth_headers(user))
    assert resp.status_code == 200
    body = resp.json()
    assert body["kind"] == "unassigned"
    assert body["tiles"] == []


@pytest.mark.asyncio
async def test_dashboard_for_doctor(client, db_session):
    doctor = await make_user(db_session, UserRole.DOCTOR, full_name="Dr. Grey")
    resp = await client.get("/api/v1/dashboard", headers=auth_headers(doctor))
    assert resp.status_code == 200
    body = resp.json()
    assert body["kind"] == "doctor"
    assert body["title"] == "Welcome, Doctor"
    assert [tile["path"] for tile in body["tiles"]] == [
        "/api/v1/appointments/doctor",
        "/api/v1/patient-records",
        "/api/v1/prescriptions",
        "/api/v1/providers/me/availability",
    ]


@pytest.mark.asyncio
async def test_dashboard_rejects_bad_token(client):
    resp = await client.get("/api/v1/dashboard", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
