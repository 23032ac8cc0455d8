"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.

Gateway connection details (base URL, session name, access key) are NOT here:
operators edit them at runtime through the site settings record. Only the
fallback access key lives in the environment.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")
    app_name: str = Field(default="Raahi Auctions", alias="APP_NAME")

    # Database
    database_url: str = Field(default="sqlite:///./app.db", alias="DATABASE_URL")

    # Bearer tokens
    jwt_secret_key: str = Field(alias="JWT_SECRET_KEY", min_length=16)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    token_expires_days: int = Field(
        default=30, alias="TOKEN_EXPIRES_DAYS", ge=1, le=90
    )

    # OTP
    otp_expires_minutes: int = Field(default=5, alias="OTP_EXPIRES_MINUTES", ge=1)
    otp_resend_cooldown_seconds: int = Field(
        default=30, alias="OTP_RESEND_COOLDOWN_SECONDS", ge=0
    )

    # Password reset
    reset_token_expires_minutes: int = Field(
        default=60, alias="RESET_TOKEN_EXPIRES_MINUTES", ge=1
    )

    # Messaging gateway (WAHA)
    waha_default_api_key: str | None = Field(default=None, alias="WAHA_DEFAULT_API_KEY")
    waha_timeout_seconds: float = Field(
        default=10.0, alias="WAHA_TIMEOUT_SECONDS", gt=0
    )

    # Admin panel
    session_secret_key: str = Field(
        default="change-me-admin-session", alias="SESSION_SECRET_KEY"
    )

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def token_expires_in(self) -> timedelta:
        """Lifetime of every bearer token, whichever flow issued it."""
        return timedelta(days=self.token_expires_days)

    @computed_field
    @property
    def otp_expires_in(self) -> timedelta:
        return timedelta(minutes=self.otp_expires_minutes)

    @computed_field
    @property
    def otp_resend_cooldown(self) -> timedelta:
        return timedelta(seconds=self.otp_resend_cooldown_seconds)

    @computed_field
    @property
    def reset_token_expires_in(self) -> timedelta:
        return timedelta(minutes=self.reset_token_expires_minutes)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
