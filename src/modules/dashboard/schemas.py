"""Dashboard schemas."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class DashboardKind(StrEnum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    PATIENT = "patient"
    DOCTOR = "doctor"
    HOSPITAL_ADMIN = "hospital_admin"
    PHARMACIST_ADMIN = "pharmacist_admin"
    UNASSIGNED = "unassigned"


class DashboardTile(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    path: str


class DashboardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DashboardKind
    title: str
    message: str | None = None
    redirect_to: str | None = None
    tiles: tuple[DashboardTile, ...] = ()
