"""
Centralized configuration management using Pydantic Settings.

Settings are loaded from environment variables and an optional .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be overridden with an environment variable of the same
    name (case-insensitive), e.g. DATABASE_URL or LOG_LEVEL.
    """

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/users.db",
        description="Async SQLAlchemy database URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo emitted SQL statements (debug only)"
    )
    database_pool_size: int = Field(
        default=5,
        ge=1,
        description="Connection pool size for server databases (ignored for SQLite)"
    )
    database_max_overflow: int = Field(
        default=10,
        ge=0,
        description="Extra connections allowed beyond pool size (ignored for SQLite)"
    )
    create_tables_on_startup: bool = Field(
        default=False,
        description="Create the users table in init_db() when missing"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines instead of plain text"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Validate database URL format.

        Only async drivers are accepted since the repository runs on an
        AsyncEngine.
        """
        if not v or v.strip() == "":
            raise ValueError("DATABASE_URL is required and cannot be empty")

        valid_schemes = ["sqlite+aiosqlite", "postgresql+asyncpg", "mysql+aiomysql"]
        if not any(v.startswith(scheme + "://") for scheme in valid_schemes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {', '.join(valid_schemes)}. "
                f"Got: {v[:20]}..."
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level to upper case and reject unknown names."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. Got: {v}"
            )
        return level


# Global settings instance
settings = Settings()
