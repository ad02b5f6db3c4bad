"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing or blank."""


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str | None = Field(
        default=None,
        description=(
            "Connection string of the master database. Either a SQLAlchemy URL "
            "or a SQL Server connection string (Server=...;Database=...)"
        ),
    )
    odbc_driver: str = Field(
        default="ODBC Driver 18 for SQL Server",
        description="ODBC driver used for SQL Server connection strings that do not name one",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description=(
            "Timezone used to present stored timestamps. When unset, timestamps "
            "keep the offset they were stored with"
        ),
    )
    enable_seeding: bool = Field(
        default=True,
        description="Insert the default attachment rows into empty tables during provisioning",
    )
    provision_on_startup: bool = Field(
        default=False,
        description="Provision the master database when the API starts",
    )
    log_level: str = Field(default="INFO", description="Logging level for scripts")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["ConfigurationError", "Settings", "get_settings", "reset_settings_cache"]
