"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./data/reports.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    upload_dir: Path = Field(
        default=Path("./uploads"),
        description="Directory where uploaded CSV files are staged while a job runs",
    )
    allowed_origin: str = Field(
        default="*",
        description="Origin allowed by CORS; '*' accepts any origin",
        min_length=1,
    )
    port: int = Field(default=4000, description="Port used by the HTTP server", gt=0)
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone used for job and report timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                "LOG_LEVEL must be one of " + ", ".join(sorted(_LOG_LEVELS))
            )
        return level

    @property
    def allowed_origins(self) -> list[str]:
        """Return the origins accepted by the CORS middleware."""

        return [origin.strip() for origin in self.allowed_origin.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
