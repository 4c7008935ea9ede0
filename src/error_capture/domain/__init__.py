"""Domain layer: records, bounded log and notifications."""

from .bounded_log import BoundedLog
from .entities import ErrorEntry, LogEntry
from .enums import BoundaryState, CaptureLevel, CaptureOrigin, LogLevel, ResolutionFilter
from .value_objects import ErrorDetails, ReportedError, UnhandledRejectionError

__all__ = [
    "BoundedLog",
    "ErrorEntry",
    "LogEntry",
    "ErrorDetails",
    "ReportedError",
    "UnhandledRejectionError",
    "BoundaryState",
    "CaptureLevel",
    "CaptureOrigin",
    "LogLevel",
    "ResolutionFilter",
]
