"""Domain enums for capture classification."""

from enum import Enum


class LogLevel(str, Enum):
    """Severity of a ``LogEntry`` in the structured logger."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class CaptureLevel(str, Enum):
    """Scope a captured failure originated from."""

    GLOBAL = "global"
    PAGE = "page"
    COMPONENT = "component"


class CaptureOrigin(str, Enum):
    """Where a failure entered the pipeline."""

    BOUNDARY = "boundary"
    UNCAUGHT = "uncaught"
    UNHANDLED_REJECTION = "unhandledRejection"
    MANUAL = "manual"
    REQUEST = "request"


class ResolutionFilter(str, Enum):
    """Ledger listing filter used by monitoring consumers."""

    ALL = "all"
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class BoundaryState(str, Enum):
    """States of a ``CaptureBoundary``."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
