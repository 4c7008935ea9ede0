"""Domain events for cross-component notification."""

from .base import DomainEvent
from .ledger_events import (
    LEDGER_AGGREGATE_ID,
    ErrorAdded,
    ErrorRemoved,
    ErrorResolved,
    ErrorsCleared,
    ErrorsImported,
)

__all__ = [
    "DomainEvent",
    "LEDGER_AGGREGATE_ID",
    "ErrorAdded",
    "ErrorResolved",
    "ErrorRemoved",
    "ErrorsCleared",
    "ErrorsImported",
]
