"""Pydantic schemas for users and profiles."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from src.shared.enums import UserRole


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: str = Field(serialization_alias="id")
    email: str
    role: UserRole | None = None
    full_name: str
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    avatar_url: str | None = None

    @computed_field(return_type=str, alias="name")
    def name(self) -> str:
        return self.full_name


class UserAdminPublic(UserPublic):
    is_active: bool
    created_at: datetime


class UserUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = Field(default=None, max_length=255)
    date_of_birth: date | None = None
    avatar_url: str | None = Field(default=None, max_length=255)


class RoleAssignment(BaseModel):
    role: UserRole | None = None
