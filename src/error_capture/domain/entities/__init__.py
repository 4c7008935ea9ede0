"""Record models held by the ledger and the structured logger."""

from .base import RecordModel, utc_now
from .error_entry import ErrorEntry
from .log_entry import LogEntry

__all__ = [
    "RecordModel",
    "ErrorEntry",
    "LogEntry",
    "utc_now",
]
