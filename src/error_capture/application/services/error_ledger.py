"""Resolvable error ledger."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from ...core.exceptions import InvalidErrorDataError
from ...domain.bounded_log import BoundedLog
from ...domain.entities import ErrorEntry
from ...domain.enums import ResolutionFilter
from ...domain.events import (
    LEDGER_AGGREGATE_ID,
    DomainEvent,
    ErrorAdded,
    ErrorRemoved,
    ErrorResolved,
    ErrorsCleared,
    ErrorsImported,
)
from ...domain.value_objects import ErrorDetails
from ..dtos import ErrorLedgerExport, LedgerCounts, PersistedLedger, parse_payload
from ..interfaces import EnvironmentSnapshot, KeyValueStorage

if TYPE_CHECKING:
    from ...infrastructure.logging import StructuredLogger

logger = structlog.get_logger(__name__)

STORAGE_KEY = "error-ledger"

LedgerListener = Callable[[DomainEvent], None]


class ErrorLedger:
    """Bounded, newest-first store of captured failures.

    Holds at most ``max_entries`` entries; adding beyond that evicts the
    oldest. ``error_count`` counts every failure ever added and survives
    ``clear_errors``; ``unresolved_count`` tracks unresolved entries currently
    held. Every mutation writes the full ledger through to storage.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        structured_logger: StructuredLogger | None = None,
        environment: EnvironmentSnapshot | None = None,
        max_entries: int = 100,
        on_change: Callable[[int, int], None] | None = None,
        storage_key: str = STORAGE_KEY,
    ) -> None:
        """Initialize the ledger and hydrate it from storage.

        Args:
            storage: Durable storage; persistence is skipped if ``None``
            structured_logger: Logger every added failure is mirrored to
            environment: Source of url, user agent and time for enrichment
            max_entries: Ledger capacity
            on_change: Called with ``(entries, unresolved)`` after each mutation
            storage_key: Key the ledger is persisted under
        """
        self._storage = storage
        self._structured_logger = structured_logger
        self._environment = environment
        self._on_change = on_change
        self._storage_key = storage_key
        self._lock = threading.RLock()
        self._listeners: list[LedgerListener] = []

        self._errors: BoundedLog[ErrorEntry] = BoundedLog(max_entries)
        self._error_count = 0
        self._unresolved_count = 0
        self._load_persisted_errors()

    # --- counters ---

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def unresolved_count(self) -> int:
        return self._unresolved_count

    @property
    def max_entries(self) -> int:
        return self._errors.capacity

    def counts(self) -> LedgerCounts:
        with self._lock:
            return LedgerCounts(error_count=self._error_count, unresolved_count=self._unresolved_count)

    # --- notifications ---

    def subscribe(self, listener: LedgerListener) -> Callable[[], None]:
        """Register ``listener`` for ledger events. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: DomainEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.warning("Ledger listener failed", event_type=event.event_type, error=str(e))

    def _changed(self) -> None:
        self._persist_errors()
        if self._on_change is not None:
            try:
                self._on_change(len(self._errors), self._unresolved_count)
            except Exception as e:
                logger.warning("Ledger change callback failed", error=str(e))

    # --- persistence ---

    def _load_persisted_errors(self) -> None:
        if self._storage is None:
            return
        try:
            raw = self._storage.get(self._storage_key)
            if raw is None:
                return
            persisted = parse_payload(raw, PersistedLedger, InvalidErrorDataError)
        except Exception as e:
            logger.warning("Failed to load saved errors", key=self._storage_key, error=str(e))
            return

        self._load(persisted.errors)
        logger.debug("Saved errors loaded", count=len(self._errors))

    def _persist_errors(self) -> None:
        if self._storage is None:
            return
        payload = PersistedLedger(errors=self._errors.snapshot())
        try:
            self._storage.set(self._storage_key, payload.to_json())
        except Exception as e:
            logger.warning("Failed to persist errors", key=self._storage_key, error=str(e))

    def _load(self, entries: list[ErrorEntry]) -> None:
        entries = entries[: self._errors.capacity]
        self._errors.replace(entries)
        self._error_count = len(entries)
        self._unresolved_count = sum(1 for entry in entries if not entry.resolved)

    # --- mutations ---

    def _enrich(self, context: dict[str, Any] | None) -> dict[str, Any]:
        enriched = dict(context or {})
        env = self._environment
        if env is None:
            return enriched
        if not enriched.get("timestamp"):
            enriched["timestamp"] = env.now().isoformat()
        if not enriched.get("url") and env.url:
            enriched["url"] = env.url
        if not enriched.get("userAgent") and env.user_agent:
            enriched["userAgent"] = env.user_agent
        return enriched

    def add_error(self, error: BaseException | ErrorDetails, context: dict[str, Any] | None = None) -> ErrorEntry:
        """Record a failure at the head of the ledger and mirror it to the logger."""
        details = error if isinstance(error, ErrorDetails) else ErrorDetails.from_exception(error)
        enriched = self._enrich(context)

        fields: dict[str, Any] = {"error": details, "context": enriched}
        if self._environment is not None:
            fields["timestamp"] = self._environment.now()
        retry_count = enriched.get("retryCount")
        if isinstance(retry_count, int) and not isinstance(retry_count, bool) and retry_count >= 0:
            fields["retry_count"] = retry_count
        entry = ErrorEntry(**fields)

        with self._lock:
            evicted = self._errors.prepend(entry)
            self._error_count += 1
            # evicted unresolved entries stop counting as held
            evicted_unresolved = sum(1 for old in evicted if not old.resolved)
            self._unresolved_count = max(0, self._unresolved_count + 1 - evicted_unresolved)

            self._publish(
                ErrorAdded.create(
                    entry.id,
                    error_name=details.name,
                    error_message=details.message,
                    context=enriched,
                )
            )
            self._changed()

        if self._structured_logger is not None:
            try:
                self._structured_logger.log(details, entry.context)
            except Exception as e:
                logger.warning("Failed to mirror error to structured logger", error_id=entry.id, error=str(e))
        return entry

    def resolve_error(self, error_id: str) -> bool:
        """Mark an entry resolved. Unknown ids and resolved entries are left alone.

        Returns:
            True if an entry changed state
        """
        with self._lock:
            changed = self._errors.update_where(
                lambda entry: entry.id == error_id and not entry.resolved,
                lambda entry: entry.as_resolved(),
            )
            if not changed:
                return False
            self._unresolved_count = max(0, self._unresolved_count - changed)
            self._publish(ErrorResolved.create(error_id))
            self._changed()
            return True

    def remove_error(self, error_id: str) -> bool:
        """Delete an entry whether or not it is resolved.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            removed = self._errors.remove_where(lambda entry: entry.id == error_id)
            if not removed:
                return False
            unresolved_removed = sum(1 for entry in removed if not entry.resolved)
            self._unresolved_count = max(0, self._unresolved_count - unresolved_removed)
            self._publish(ErrorRemoved.create(error_id, was_resolved=unresolved_removed == 0))
            self._changed()
            return True

    def clear_errors(self) -> None:
        """Drop every entry. ``error_count`` keeps counting what was ever seen."""
        with self._lock:
            removed_count = len(self._errors)
            self._errors.clear()
            self._unresolved_count = 0
            self._publish(ErrorsCleared.create(LEDGER_AGGREGATE_ID, removed_count=removed_count))
            self._changed()

    # --- queries ---

    def get_error_by_id(self, error_id: str) -> ErrorEntry | None:
        with self._lock:
            return self._errors.find(lambda entry: entry.id == error_id)

    def list(self, status: ResolutionFilter | str = ResolutionFilter.ALL) -> list[ErrorEntry]:
        """Return entries newest first, optionally only resolved or unresolved ones."""
        status = ResolutionFilter(status)
        with self._lock:
            entries = self._errors.snapshot()
        if status == ResolutionFilter.UNRESOLVED:
            return [entry for entry in entries if not entry.resolved]
        if status == ResolutionFilter.RESOLVED:
            return [entry for entry in entries if entry.resolved]
        return entries

    @property
    def errors(self) -> list[ErrorEntry]:
        return self.list()

    # --- export / import ---

    def export_errors(self) -> str:
        """Serialize the ledger as a versioned JSON document."""
        return ErrorLedgerExport(errors=self.list()).to_json(indent=2)

    def import_errors(self, error_log: str) -> None:
        """Replace the ledger with the entries of an export document.

        Counts are recomputed from the imported entries.

        Raises:
            InvalidErrorDataError: If the document cannot be parsed or validated;
                the ledger is left untouched
        """
        export = parse_payload(error_log, ErrorLedgerExport, InvalidErrorDataError, require_version=True)
        with self._lock:
            self._load(export.errors)
            self._publish(ErrorsImported.create(LEDGER_AGGREGATE_ID, imported_count=len(self._errors)))
            self._changed()
        logger.info("Errors imported", count=len(export.errors))
