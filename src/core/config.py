"""Application configuration via Pydantic settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared.enums import UserRole


class Settings(BaseSettings):
    """Central configuration object loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="none",
    )

    app_name: str = "MediCare Portal API"
    debug: bool = False
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    database_url: str = Field(..., alias="DATABASE_URL")
    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    jwt_expires_in_minutes: int = Field(60 * 24, alias="JWT_EXPIRES_IN")

    redis_url: str | None = Field(None, alias="REDIS_URL")
    cache_prefix: str = Field("medicare", alias="CACHE_PREFIX")
    cache_ttl_seconds: int = Field(300, alias="CACHE_TTL_SECONDS")

    default_timezone: str = Field("UTC", alias="DEFAULT_TIMEZONE")
    sign_in_path: str = Field("/api/v1/auth/login", alias="SIGN_IN_PATH")
    # "none" leaves new accounts without a role until an admin assigns one.
    default_signup_role: UserRole | None = Field(UserRole.PATIENT, alias="DEFAULT_SIGNUP_ROLE")


@lru_cache(1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings = get_settings()
