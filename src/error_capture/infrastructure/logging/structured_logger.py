"""Leveled, bounded structured logger with console, remote and storage sinks."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog

from ...application.dtos import LogExport, LogStats, PersistedLogs, parse_payload
from ...application.interfaces import EnvironmentSnapshot, KeyValueStorage, RemoteSink
from ...core.exceptions import InvalidLogDataError
from ...domain.bounded_log import BoundedLog
from ...domain.entities import LogEntry
from ...domain.enums import LogLevel
from ...domain.value_objects import ErrorDetails, new_session_id

# Diagnostics about the logger itself. Never routed back into the ring buffer.
logger = structlog.get_logger(__name__)

STORAGE_KEY = "error-logs"
CONSOLE_LOGGER_NAME = "error_capture.console"

_CONSOLE_METHODS = {
    LogLevel.ERROR: "error",
    LogLevel.WARN: "warning",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
}


@dataclass
class LoggerConfig:
    """Live configuration of a ``StructuredLogger``."""

    max_entries: int = 1000
    enable_console: bool = True
    enable_storage: bool = True
    enable_remote: bool = False
    remote_endpoint: str | None = None
    filter_levels: list[LogLevel] = field(default_factory=lambda: list(LogLevel))

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.filter_levels = [LogLevel(level) for level in self.filter_levels]

    def accepts(self, level: LogLevel) -> bool:
        return level in self.filter_levels


class StructuredLogger:
    """Ring buffer of ``LogEntry`` records for one session.

    Every accepted call appends an entry, evicting the oldest ones beyond
    ``max_entries``, writes it to the console sink, queues it for the remote
    collector when one is configured, and then writes the whole buffer to
    storage. Sink and storage failures are reported as diagnostics warnings
    and never reach the caller.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        storage: KeyValueStorage | None = None,
        remote_sink: RemoteSink | None = None,
        environment: EnvironmentSnapshot | None = None,
        on_sink_failure: Callable[[str], None] | None = None,
        storage_key: str = STORAGE_KEY,
    ) -> None:
        """Initialize the logger and hydrate it from storage.

        Args:
            config: Logger configuration
            storage: Durable storage for the buffer; persistence is skipped if ``None``
            remote_sink: Delivery channel for the remote collector
            environment: Source of url, user agent and time for new entries
            on_sink_failure: Called with the sink name when a sink fails
            storage_key: Key the buffer is persisted under
        """
        self._config = config or LoggerConfig()
        self._storage = storage
        self._remote = remote_sink
        self._environment = environment
        self._on_sink_failure = on_sink_failure
        self._storage_key = storage_key
        self._lock = threading.RLock()
        self._console = structlog.get_logger(CONSOLE_LOGGER_NAME)

        self._session_id = new_session_id()
        self._logs: BoundedLog[LogEntry] = BoundedLog(self._config.max_entries)
        self._load_persisted_logs()

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def config(self) -> LoggerConfig:
        """A copy of the live configuration."""
        return dataclasses.replace(self._config)

    # --- persistence ---

    def _storage_enabled(self) -> bool:
        return self._config.enable_storage and self._storage is not None

    def _load_persisted_logs(self) -> None:
        if not self._storage_enabled():
            return
        try:
            raw = self._storage.get(self._storage_key)
            if raw is None:
                return
            persisted = parse_payload(raw, PersistedLogs, InvalidLogDataError)
        except Exception as e:
            logger.warning("Failed to load persisted error logs", key=self._storage_key, error=str(e))
            self._report_sink_failure("storage")
            return

        self._logs.replace(persisted.logs[-self._config.max_entries :])
        logger.debug("Persisted error logs loaded", count=len(self._logs))

    def _persist_logs(self) -> None:
        if not self._storage_enabled():
            return
        payload = PersistedLogs(
            logs=self._logs.tail(self._config.max_entries),
            session_id=self._session_id,
        )
        try:
            self._storage.set(self._storage_key, payload.to_json())
        except Exception as e:
            logger.warning("Failed to persist error logs", key=self._storage_key, error=str(e))
            self._report_sink_failure("storage")

    def _report_sink_failure(self, sink: str) -> None:
        if self._on_sink_failure is not None:
            self._on_sink_failure(sink)

    # --- entry construction and sinks ---

    def _create_log_entry(
        self,
        level: LogLevel,
        message: str,
        error: ErrorDetails | None = None,
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> LogEntry:
        env = self._environment
        extra: dict[str, Any] = {}
        if env is not None:
            extra["timestamp"] = env.now()

        return LogEntry(
            level=level,
            message=message,
            error=error,
            context=dict(context) if context is not None else None,
            stack=error.stack if error is not None else None,
            user_agent=env.user_agent if env is not None else None,
            url=env.url if env is not None else None,
            user_id=(context or {}).get("userId"),
            session_id=self._session_id,
            metadata=dict(metadata) if metadata is not None else None,
            **extra,
        )

    def _output_log(self, entry: LogEntry) -> None:
        if self._config.enable_console:
            emit = getattr(self._console, _CONSOLE_METHODS[entry.level])
            fields: dict[str, Any] = {"log_id": entry.id, "session_id": entry.session_id}
            if entry.error is not None:
                fields["error"] = str(entry.error)
            if entry.context:
                fields["context"] = entry.context
            if entry.metadata:
                fields["metadata"] = entry.metadata
            emit(entry.message, **fields)

        if self._config.enable_remote and self._config.remote_endpoint:
            if self._remote is None:
                logger.debug("Remote logging enabled without a remote sink", endpoint=self._config.remote_endpoint)
                return
            try:
                self._remote.send(self._config.remote_endpoint, entry.to_json_dict())
            except Exception as e:
                logger.warning(
                    "Failed to send log to remote endpoint",
                    endpoint=self._config.remote_endpoint,
                    error=str(e),
                )
                self._report_sink_failure("remote")

    def _record(
        self,
        level: LogLevel,
        message: str,
        error: ErrorDetails | None,
        context: dict[str, Any] | None,
        metadata: dict[str, Any] | None,
    ) -> LogEntry | None:
        with self._lock:
            if not self._config.accepts(level):
                return None

            entry = self._create_log_entry(level, message, error, context, metadata)
            self._logs.append(entry)
            self._output_log(entry)
            self._persist_logs()
            return entry

    # --- public logging API ---

    def log(
        self,
        error: BaseException | ErrorDetails,
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> LogEntry | None:
        """Record a failure at ``error`` level.

        Returns:
            The new entry, or ``None`` if ``error`` is filtered out
        """
        details = error if isinstance(error, ErrorDetails) else ErrorDetails.from_exception(error)
        return self._record(LogLevel.ERROR, details.message, details, context, metadata)

    def warn(self, message: str, context: dict[str, Any] | None = None, metadata: dict[str, Any] | None = None) -> LogEntry | None:
        return self._record(LogLevel.WARN, message, None, context, metadata)

    def info(self, message: str, context: dict[str, Any] | None = None, metadata: dict[str, Any] | None = None) -> LogEntry | None:
        return self._record(LogLevel.INFO, message, None, context, metadata)

    def debug(self, message: str, context: dict[str, Any] | None = None, metadata: dict[str, Any] | None = None) -> LogEntry | None:
        return self._record(LogLevel.DEBUG, message, None, context, metadata)

    # --- query and mutation surface ---

    def get_logs(self, level: LogLevel | str | None = None) -> list[LogEntry]:
        """Return all entries in append order, or those with exactly ``level``."""
        with self._lock:
            entries = self._logs.snapshot()
        if level is None:
            return entries
        return [entry for entry in entries if entry.level == level]

    def get_error_logs(self) -> list[LogEntry]:
        return self.get_logs(LogLevel.ERROR)

    def get_stats(self) -> LogStats:
        """Count entries per level with a full scan."""
        entries = self.get_logs()
        counts = {level: 0 for level in LogLevel}
        for entry in entries:
            counts[entry.level] += 1
        return LogStats(
            total=len(entries),
            error_count=counts[LogLevel.ERROR],
            warn_count=counts[LogLevel.WARN],
            info_count=counts[LogLevel.INFO],
            debug_count=counts[LogLevel.DEBUG],
            session_id=self._session_id,
        )

    def clear_logs(self) -> None:
        """Empty the buffer and drop the persisted copy."""
        with self._lock:
            self._logs.clear()
            if not self._storage_enabled():
                return
            try:
                self._storage.remove(self._storage_key)
            except Exception as e:
                logger.warning("Failed to remove persisted error logs", key=self._storage_key, error=str(e))
                self._report_sink_failure("storage")

    def export_logs(self) -> str:
        """Serialize the buffer as a versioned, self-describing JSON document."""
        export = LogExport(logs=self.get_logs(), session_id=self._session_id)
        return export.to_json(indent=2)

    def import_logs(self, log_data: str) -> None:
        """Replace the buffer with the logs of an export document.

        Raises:
            InvalidLogDataError: If the document cannot be parsed or validated;
                the buffer is left untouched
        """
        export = parse_payload(log_data, LogExport, InvalidLogDataError, require_version=True)
        with self._lock:
            self._logs.replace(export.logs[-self._config.max_entries :])
            self._persist_logs()
        logger.info("Error logs imported", count=len(export.logs), source_session=export.session_id)

    def update_config(self, **changes: Any) -> LoggerConfig:
        """Merge ``changes`` into the live configuration.

        Applies to subsequent calls only; existing entries are not re-filtered.

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in dataclasses.fields(LoggerConfig)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown logger config keys: {sorted(unknown)}")

        with self._lock:
            self._config = dataclasses.replace(self._config, **changes)
            self._logs.resize(self._config.max_entries)
        logger.info("Logger configuration updated", changes=_describe(changes))
        return self.config

    def close(self) -> None:
        if self._remote is not None:
            self._remote.close()


def _describe(changes: dict[str, Any]) -> dict[str, Any]:
    def plain(value: Any) -> Any:
        if isinstance(value, Iterable) and not isinstance(value, str):
            return [getattr(item, "value", item) for item in value]
        return value

    return {key: plain(value) for key, value in changes.items()}
