"""Notifications published by the error ledger.

``aggregate_id`` is the id of the affected entry, or ``"ledger"`` for events
that concern the whole ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .base import DomainEvent

LEDGER_AGGREGATE_ID = "ledger"


@dataclass(frozen=True)
class ErrorAdded(DomainEvent):
    """A failure was appended to the ledger."""

    error_name: str = ""
    error_message: str = ""
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ErrorResolved(DomainEvent):
    """An unresolved entry was marked resolved."""


@dataclass(frozen=True)
class ErrorRemoved(DomainEvent):
    """An entry was deleted from the ledger."""

    was_resolved: bool = False


@dataclass(frozen=True)
class ErrorsCleared(DomainEvent):
    """Every entry was deleted."""

    removed_count: int = 0


@dataclass(frozen=True)
class ErrorsImported(DomainEvent):
    """The ledger content was replaced by an import."""

    imported_count: int = 0
