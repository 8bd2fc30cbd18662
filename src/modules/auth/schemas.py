"""Auth module schemas."""

from pydantic import BaseModel, Field

from src.modules.users.schemas import UserPublic


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=100)


class TokenResponse(BaseModel):
    token: str
    user_info: UserPublic
