# office_hours/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime.

    These settings drive:
    - DB connection
    - Logging verbosity
    - Defaults for the persisted GlobalSettings row (forward window, duration)
    - Bootstrap of the first administrator
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Office Hours Scheduler"
    APP_ENV: str = Field("local", description="Environment name: local/test/dev/stage/prod")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./office_hours.db",
        description="SQLAlchemy-compatible async database URL",
    )

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level for the service (DEBUG/INFO/WARNING/ERROR).",
    )

    # --- Scheduling defaults (seed values for the GlobalSettings row) ---
    DEFAULT_FORWARD_WINDOW_MONTHS: int = Field(
        default=2,
        ge=0,
        description="Number of whole months ahead used for the unclaimed-sessions window.",
    )
    DEFAULT_SESSION_DURATION_MINUTES: int = Field(
        default=60,
        gt=0,
        description="Duration applied to new series that do not specify one.",
    )
    ORG_NAME: str = Field(
        default="Office Hours",
        description="Organization display name stored in global settings.",
    )

    # --- Bootstrap administrator ---
    BOOTSTRAP_ADMIN_PRINCIPAL: str | None = Field(
        default=None,
        description=(
            "Principal that is authorized as the first administrator at startup "
            "if no user with that principal exists yet."
        ),
    )
    BOOTSTRAP_ADMIN_NAME: str = Field(
        default="Initial Admin",
        description="Display name of the bootstrap administrator.",
    )
    BOOTSTRAP_ADMIN_EMAIL: str = Field(
        default="admin@ohscheduler.local",
        description="E-mail address of the bootstrap administrator.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
