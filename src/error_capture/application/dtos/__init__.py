"""Transfer objects for export, import, persistence and query results."""

from .transfer_dtos import (
    EXPORT_VERSION,
    ErrorLedgerExport,
    LedgerCounts,
    LogExport,
    LogStats,
    PersistedLedger,
    PersistedLogs,
    parse_payload,
)

__all__ = [
    "EXPORT_VERSION",
    "ErrorLedgerExport",
    "LedgerCounts",
    "LogExport",
    "LogStats",
    "PersistedLedger",
    "PersistedLogs",
    "parse_payload",
]
