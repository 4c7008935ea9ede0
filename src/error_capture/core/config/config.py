"""Configuration management for the error capture pipeline."""

from enum import Enum
from functools import lru_cache
from typing import Annotated, Any

from dotenv import load_dotenv
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ...domain.enums import LogLevel
from .logging import LogFormat, LoggingConfig, LogVerbosity

load_dotenv()


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    APP_NAME: str = Field(default="Error Capture API")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: Environment = Field(default=Environment.DEVELOPMENT)

    # API Configuration
    API_HOST: str = Field(default="127.0.0.1")
    API_PORT: int = Field(default=8000, ge=1, le=65535)

    # Diagnostics Logging Configuration
    LOG_LEVEL: LogVerbosity = Field(default=LogVerbosity.INFO)
    LOG_FORMAT: LogFormat = Field(default=LogFormat.JSON)

    # Durable Storage Configuration
    STORAGE_ENABLED: bool = Field(default=True)
    STORAGE_DIR: str = Field(default=".error_capture")

    # Ledger / Logger Configuration
    LEDGER_MAX_ENTRIES: int = Field(default=100, ge=1)
    LOGGER_MAX_ENTRIES: int = Field(default=1000, ge=1)
    LOGGER_CONSOLE_ENABLED: bool = Field(default=True)
    LOGGER_FILTER_LEVELS: Annotated[list[LogLevel], NoDecode] = Field(
        default_factory=lambda: [LogLevel.ERROR, LogLevel.WARN]
    )

    # Remote Sink Configuration
    REMOTE_ENABLED: bool = Field(default=False)
    REMOTE_ENDPOINT: str | None = Field(default=None)
    REMOTE_TIMEOUT: float = Field(default=5.0, gt=0.0, le=60.0)
    REMOTE_FAILURE_THRESHOLD: int = Field(default=5, ge=1)
    REMOTE_RECOVERY_TIMEOUT: float = Field(default=60.0, ge=0.0)

    # Capture Boundary Configuration
    BOUNDARY_MAX_RETRIES: int = Field(default=3, ge=0, le=10)

    # Monitoring Configuration
    METRICS_ENABLED: bool = Field(default=True)

    @field_validator("LOGGER_FILTER_LEVELS", mode="before")
    @classmethod
    def split_filter_levels(cls: Any, v: Any) -> Any:
        """Accept a comma separated list such as ``error,warn``."""
        if isinstance(v, str):
            return [part.strip().lower() for part in v.split(",") if part.strip()]
        return v

    @field_validator("REMOTE_ENDPOINT")
    @classmethod
    def validate_remote_endpoint(cls: Any, v: str | None) -> str | None:
        """Reject endpoints that httpx could not post to."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("REMOTE_ENDPOINT must be an http(s) URL")
        return v.strip()

    @computed_field
    @property
    def logging_config(self: Any) -> LoggingConfig:
        """Generate diagnostics logging configuration from individual settings."""
        return LoggingConfig(level=self.LOG_LEVEL, format=self.LOG_FORMAT)

    @computed_field
    @property
    def logger_config(self: Any) -> dict[str, Any]:
        """Keyword arguments for the application-scoped ``LoggerConfig``."""
        return {
            "max_entries": self.LOGGER_MAX_ENTRIES,
            "enable_console": self.LOGGER_CONSOLE_ENABLED,
            "enable_storage": self.STORAGE_ENABLED,
            "enable_remote": self.REMOTE_ENABLED,
            "remote_endpoint": self.REMOTE_ENDPOINT,
            "filter_levels": list(self.LOGGER_FILTER_LEVELS),
        }

    @property
    def is_development(self: Any) -> bool:
        """Check if running in development mode."""
        return self.DEBUG or self.ENVIRONMENT == Environment.DEVELOPMENT

    def setup_logging(self: Any) -> None:
        """Initialize diagnostics logging using the logging configuration."""
        from .logging import configure_logging

        configure_logging(self.logging_config)


@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    return Settings()


# Alias for dependency injection
Config = Settings
