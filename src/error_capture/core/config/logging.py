"""Diagnostics logging configuration for the error capture pipeline.

Two kinds of logging live side by side in this package. The records the
pipeline *manages* (``LogEntry`` in the ring buffer) belong to
``StructuredLogger``. Everything configured here is the pipeline's own
diagnostics output: storage failures, remote sink failures, lifecycle events.
It goes straight to structlog and never re-enters the ring buffer.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Any

import structlog
from pydantic import BaseModel, Field


class LogVerbosity(str, Enum):
    """Supported diagnostics logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Supported diagnostics output formats."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Centralized diagnostics logging configuration."""

    level: LogVerbosity = Field(default=LogVerbosity.INFO, description="Logging level for the application")
    format: LogFormat = Field(default=LogFormat.JSON, description="Output format for log messages")

    third_party_levels: dict[str, LogVerbosity] = Field(
        default_factory=lambda: {
            "httpx": LogVerbosity.WARNING,
            "httpcore": LogVerbosity.WARNING,
            "uvicorn": LogVerbosity.INFO,
        },
        description="Logging levels for third-party libraries",
    )


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure standard library logging and structlog.

    Args:
        config: Logging configuration, defaults to ``LoggingConfig()``
    """
    config = config or LoggingConfig()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.level.value),
        force=True,
    )

    for lib_name, level in config.third_party_levels.items():
        logging.getLogger(lib_name).setLevel(level.value)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.format == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
