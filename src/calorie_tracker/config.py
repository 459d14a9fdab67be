"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    timezone: str = "UTC"
    history_retention_days: int = Field(default=90, gt=0)
    history_editable_days: int = Field(default=7, ge=0)
    strict_unit_conversion: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
