"""Role-based dashboard selection."""

from __future__ import annotations

from dataclasses import dataclass

from src.modules.dashboard.schemas import DashboardKind, DashboardTile, DashboardView
from src.shared.enums import UserRole


@dataclass(frozen=True)
class DashboardState:
    is_loading: bool
    identity: str | None = None
    role: UserRole | str | None = None


ROLE_VIEWS: dict[UserRole, DashboardView] = {
    UserRole.PATIENT: DashboardView(
        kind=DashboardKind.PATIENT,
        title="Welcome, Patient",
        message="Manage your appointments, medicines, and health",
        tiles=(
            DashboardTile(
                title="Book Appointment",
                description="Schedule a visit with our doctors",
                path="/api/v1/providers",
            ),
            DashboardTile(
                title="Medicine Shop",
                description="Buy medicines for your conditions",
                path="/api/v1/pharmacy/medicines",
            ),
            DashboardTile(
                title="Medicine Reminders",
                description="Never miss a dose",
                path="/api/v1/reminders",
            ),
            DashboardTile(
                title="My Appointments",
                description="Track upcoming and past visits",
                path="/api/v1/appointments/me",
            ),
        ),
    ),
    UserRole.DOCTOR: DashboardView(
        kind=DashboardKind.DOCTOR,
        title="Welcome, Doctor",
        message="Manage your appointments, patients, and availability",
        tiles=(
            DashboardTile(
                title="My Appointments",
                description="View and manage patient appointments",
                path="/api/v1/appointments/doctor",
            ),
            DashboardTile(
                title="Patient Records",
                description="View and update patient medical records",
                path="/api/v1/patient-records",
            ),
            DashboardTile(
                title="Prescriptions",
                description="Prescribe medicines to patients",
                path="/api/v1/prescriptions",
            ),
            DashboardTile(
                title="My Availability",
                description="Choose the days you accept appointments",
                path="/api/v1/providers/me/availability",
            ),
        ),
    ),
    UserRole.HOSPITAL_ADMIN: DashboardView(
        kind=DashboardKind.HOSPITAL_ADMIN,
        title="Welcome, Admin",
        message="Manage hospital operations and staff",
        tiles=(
            DashboardTile(
                title="User Management",
                description="Manage staff and patient accounts",
                path="/api/v1/admin/users",
            ),
            DashboardTile(
                title="Doctor Availability",
                description="Set the days each doctor can be booked",
                path="/api/v1/providers",
            ),
            DashboardTile(
                title="Analytics",
                description="View hospital statistics",
                path="/api/v1/admin/analytics",
            ),
        ),
    ),
    UserRole.PHARMACIST_ADMIN: DashboardView(
        kind=DashboardKind.PHARMACIST_ADMIN,
        title="Welcome, Pharmacist",
        message="Manage medicine inventory and orders",
        tiles=(
            DashboardTile(
                title="Medicine Inventory",
                description="Manage medicine stock and catalog",
                path="/api/v1/admin/pharmacy/medicines",
            ),
            DashboardTile(
                title="Purchases",
                description="Review patient medicine orders",
                path="/api/v1/admin/pharmacy/purchases",
            ),
        ),
    ),
}

LOADING_VIEW = DashboardView(kind=DashboardKind.LOADING, title="Loading...")
UNASSIGNED_VIEW = DashboardView(
    kind=DashboardKind.UNASSIGNED,
    title="Role Not Assigned",
    message="Please contact an administrator to assign your role.",
)


def _parse_role(value: UserRole | str | None) -> UserRole | None:
    if value is None or isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        return None


def resolve_dashboard(state: DashboardState, sign_in_path: str) -> DashboardView:
    """Pick the single view to present for ``state``.

    A signed-in user whose role is missing or unrecognised gets the
    "Role Not Assigned" notice; that is a normal outcome, not an error.
    """
    if state.is_loading:
        return LOADING_VIEW
    if not state.identity:
        return DashboardView(
            kind=DashboardKind.UNAUTHENTICATED,
            title="Sign in required",
            redirect_to=sign_in_path,
        )
    role = _parse_role(state.role)
    if role is None:
        return UNASSIGNED_VIEW
    return ROLE_VIEWS[role]
