"""Value objects shared by ledger and logger records."""

from .error_details import ErrorDetails
from .identifiers import new_record_id, new_session_id
from .reported_errors import ReportedError, UnhandledRejectionError

__all__ = [
    "ErrorDetails",
    "ReportedError",
    "UnhandledRejectionError",
    "new_record_id",
    "new_session_id",
]
