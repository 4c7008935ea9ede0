"""Tests for the resolvable error ledger."""

import json
import random
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from error_capture.application.services import ErrorLedger
from error_capture.core.exceptions import InvalidErrorDataError, StorageError, UnsupportedVersionError
from error_capture.domain.enums import ResolutionFilter
from error_capture.domain.events import ErrorAdded, ErrorRemoved, ErrorResolved, ErrorsCleared
from error_capture.domain.value_objects import ErrorDetails
from error_capture.infrastructure.storage import MemoryStorage


def _held_unresolved(ledger: ErrorLedger) -> int:
    return sum(1 for entry in ledger.list() if not entry.resolved)


class TestAddError:
    def test_newest_entry_first(self, ledger: ErrorLedger) -> None:
        first = ledger.add_error(ValueError("first"))
        second = ledger.add_error(ValueError("second"))

        assert [entry.id for entry in ledger.list()] == [second.id, first.id]
        assert ledger.error_count == 2
        assert ledger.unresolved_count == 2

    def test_enriches_context(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ValueError("boom"), {"level": "component"})

        assert entry.context["level"] == "component"
        assert entry.context["url"] == "process://test-host/pytest?pid=4242"
        assert entry.context["userAgent"].startswith("CPython/")
        assert "timestamp" in entry.context

    def test_caller_context_wins_over_environment(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ValueError("boom"), {"url": "custom://here"})
        assert entry.context["url"] == "custom://here"

    def test_mirrors_to_structured_logger(self, ledger: ErrorLedger, structured_logger) -> None:
        ledger.add_error(ValueError("mirrored"), {"level": "page"})

        error_logs = structured_logger.get_error_logs()
        assert len(error_logs) == 1
        assert error_logs[0].message == "mirrored"
        assert error_logs[0].error.name == "ValueError"
        assert error_logs[0].context["level"] == "page"

    def test_takes_retry_count_from_context(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ValueError("boom"), {"retryCount": 2})
        assert entry.retry_count == 2

    def test_accepts_error_details(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ErrorDetails(name="TypeError", message="reported"))
        assert entry.error.name == "TypeError"


class TestCapacity:
    def test_keeps_the_hundred_newest(self, ledger: ErrorLedger) -> None:
        for i in range(1, 102):
            ledger.add_error(ValueError(f"e{i}"))

        entries = ledger.list()
        assert len(entries) == 100
        assert entries[0].error.message == "e101"
        assert entries[-1].error.message == "e2"
        assert all(entry.error.message != "e1" for entry in entries)
        assert ledger.error_count == 101

    def test_evicting_unresolved_entries_lowers_unresolved_count(self, storage: MemoryStorage) -> None:
        ledger = ErrorLedger(storage=storage, max_entries=2)
        for i in range(3):
            ledger.add_error(ValueError(f"e{i}"))

        assert ledger.unresolved_count == 2
        assert ledger.unresolved_count == _held_unresolved(ledger)

    def test_evicting_resolved_entries_keeps_unresolved_count(self, storage: MemoryStorage) -> None:
        ledger = ErrorLedger(storage=storage, max_entries=2)
        oldest = ledger.add_error(ValueError("oldest"))
        ledger.resolve_error(oldest.id)
        ledger.add_error(ValueError("b"))
        ledger.add_error(ValueError("c"))

        assert ledger.unresolved_count == 2


class TestResolution:
    def test_add_resolve_remove_counts(self, ledger: ErrorLedger) -> None:
        a = ledger.add_error(ValueError("a"))
        b = ledger.add_error(ValueError("b"))
        ledger.add_error(ValueError("c"))

        assert ledger.resolve_error(a.id) is True
        assert (ledger.error_count, ledger.unresolved_count) == (3, 2)

        assert ledger.remove_error(a.id) is True
        assert (ledger.error_count, ledger.unresolved_count) == (3, 2)

        assert ledger.remove_error(b.id) is True
        assert (ledger.error_count, ledger.unresolved_count) == (3, 1)
        assert len(ledger.list()) == 1

    def test_resolve_is_idempotent(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ValueError("a"))

        assert ledger.resolve_error(entry.id) is True
        assert ledger.resolve_error(entry.id) is False
        assert ledger.unresolved_count == 0
        assert ledger.get_error_by_id(entry.id).resolved is True

    def test_unknown_ids_are_ignored(self, ledger: ErrorLedger) -> None:
        ledger.add_error(ValueError("a"))

        assert ledger.resolve_error("nope") is False
        assert ledger.remove_error("nope") is False
        assert ledger.unresolved_count == 1

    def test_list_filters(self, ledger: ErrorLedger) -> None:
        a = ledger.add_error(ValueError("a"))
        ledger.add_error(ValueError("b"))
        ledger.resolve_error(a.id)

        assert [e.error.message for e in ledger.list(ResolutionFilter.RESOLVED)] == ["a"]
        assert [e.error.message for e in ledger.list("unresolved")] == ["b"]
        assert len(ledger.list("all")) == 2

    def test_clear_keeps_error_count(self, ledger: ErrorLedger) -> None:
        for i in range(3):
            ledger.add_error(ValueError(f"e{i}"))

        ledger.clear_errors()

        assert ledger.list() == []
        assert ledger.error_count == 3
        assert ledger.unresolved_count == 0

    def test_count_invariant_under_random_operations(self, storage: MemoryStorage) -> None:
        rng = random.Random(7)
        ledger = ErrorLedger(storage=storage, max_entries=10)

        for step in range(300):
            entries = ledger.list()
            op = rng.choice(["add", "add", "resolve", "remove", "clear"] if step % 50 == 49 else ["add", "add", "resolve", "remove"])
            if op == "add" or not entries:
                ledger.add_error(ValueError(f"e{step}"))
            elif op == "resolve":
                ledger.resolve_error(rng.choice(entries).id)
            elif op == "remove":
                ledger.remove_error(rng.choice(entries).id)
            else:
                ledger.clear_errors()

            assert ledger.unresolved_count == _held_unresolved(ledger)
            assert len(ledger.list()) <= 10


class TestPersistence:
    def test_every_mutation_writes_through(self, ledger: ErrorLedger, storage: MemoryStorage) -> None:
        entry = ledger.add_error(ValueError("a"))
        saved = json.loads(storage.get("error-ledger"))

        assert [e["id"] for e in saved["errors"]] == [entry.id]
        assert "lastSaved" in saved

        ledger.resolve_error(entry.id)
        saved = json.loads(storage.get("error-ledger"))
        assert saved["errors"][0]["resolved"] is True

    def test_hydrates_and_recounts_from_storage(self, storage: MemoryStorage) -> None:
        first = ErrorLedger(storage=storage)
        a = first.add_error(ValueError("a"))
        first.add_error(ValueError("b"))
        first.resolve_error(a.id)

        second = ErrorLedger(storage=storage)

        assert [e.id for e in second.list()] == [e.id for e in first.list()]
        assert second.error_count == 2
        assert second.unresolved_count == 1
        assert second.list()[0].timestamp == first.list()[0].timestamp

    def test_corrupt_storage_starts_empty(self) -> None:
        storage = MemoryStorage({"error-ledger": "{not json"})
        ledger = ErrorLedger(storage=storage)

        assert ledger.list() == []
        assert ledger.error_count == 0

    def test_storage_failures_do_not_reach_callers(self) -> None:
        class FailingStorage(MemoryStorage):
            def set(self, key: str, value: str) -> None:
                raise StorageError("disk full")

        ledger = ErrorLedger(storage=FailingStorage())
        entry = ledger.add_error(ValueError("still recorded"))

        assert ledger.get_error_by_id(entry.id) is not None

    def test_on_change_reports_sizes(self, storage: MemoryStorage) -> None:
        sizes: list[tuple[int, int]] = []
        ledger = ErrorLedger(storage=storage, on_change=lambda entries, unresolved: sizes.append((entries, unresolved)))

        entry = ledger.add_error(ValueError("a"))
        ledger.resolve_error(entry.id)

        assert sizes == [(1, 1), (1, 0)]


class TestTransfer:
    def test_export_document_shape(self, ledger: ErrorLedger) -> None:
        ledger.add_error(ValueError("a"))
        document = json.loads(ledger.export_errors())

        assert set(document) == {"errors", "exportDate", "version"}
        assert document["version"] == "1.0"
        assert document["errors"][0]["error"]["message"] == "a"

    def test_export_import_is_a_fixed_point(self, ledger: ErrorLedger) -> None:
        a = ledger.add_error(ValueError("a"), {"level": "page"})
        ledger.add_error(ValueError("b"))
        ledger.resolve_error(a.id)
        exported = ledger.export_errors()

        fresh = ErrorLedger(storage=MemoryStorage())
        fresh.import_errors(exported)

        assert json.loads(fresh.export_errors())["errors"] == json.loads(exported)["errors"]
        assert fresh.error_count == 2
        assert fresh.unresolved_count == 1

    def test_import_rehydrates_timestamps(self, ledger: ErrorLedger) -> None:
        ledger.add_error(ValueError("a"))
        ledger.add_error(ValueError("b"))

        fresh = ErrorLedger(storage=MemoryStorage())
        fresh.import_errors(ledger.export_errors())

        imported = fresh.list()
        assert [e.id for e in imported] == [e.id for e in ledger.list()]
        assert all(isinstance(e.timestamp, datetime) and e.timestamp.tzinfo is not None for e in imported)
        assert [e.timestamp for e in imported] == [e.timestamp for e in ledger.list()]

    def test_import_rejects_malformed_text(self, ledger: ErrorLedger) -> None:
        entry = ledger.add_error(ValueError("kept"))

        with pytest.raises(InvalidErrorDataError):
            ledger.import_errors("not json")
        with pytest.raises(InvalidErrorDataError):
            ledger.import_errors(json.dumps({"errors": "nope", "version": "1.0"}))
        with pytest.raises(InvalidErrorDataError):
            ledger.import_errors("[]")

        assert [e.id for e in ledger.list()] == [entry.id]

    @pytest.mark.parametrize("document", [{"errors": [], "version": "2.0"}, {"errors": []}])
    def test_import_rejects_other_versions(self, ledger: ErrorLedger, document: dict) -> None:
        ledger.add_error(ValueError("kept"))

        with pytest.raises(UnsupportedVersionError) as exc_info:
            ledger.import_errors(json.dumps(document))

        assert isinstance(exc_info.value, InvalidErrorDataError)
        assert exc_info.value.error_code == "UNSUPPORTED_VERSION"
        assert len(ledger.list()) == 1


class TestNotifications:
    def test_listeners_receive_events(self, ledger: ErrorLedger) -> None:
        events = []
        unsubscribe = ledger.subscribe(events.append)

        entry = ledger.add_error(ValueError("a"))
        ledger.resolve_error(entry.id)
        ledger.remove_error(entry.id)
        ledger.clear_errors()
        unsubscribe()
        ledger.add_error(ValueError("unseen"))

        assert [type(e) for e in events] == [ErrorAdded, ErrorResolved, ErrorRemoved, ErrorsCleared]
        assert events[2].was_resolved is True

    def test_failing_listener_does_not_break_mutation(self, ledger: ErrorLedger) -> None:
        def broken(event) -> None:
            raise RuntimeError("listener bug")

        ledger.subscribe(broken)
        entry = ledger.add_error(ValueError("a"))

        assert ledger.get_error_by_id(entry.id) is not None


class Opaque:
    def __repr__(self) -> str:
        return "<Opaque handle>"


class TestOpenContext:
    def test_numeric_user_id(self, ledger: ErrorLedger, structured_logger, storage: MemoryStorage) -> None:
        events = []
        ledger.subscribe(events.append)

        entry = ledger.add_error(RuntimeError("boom"), {"userId": 42})

        assert entry.context["userId"] == 42
        assert structured_logger.get_error_logs()[0].user_id == "42"
        assert len(json.loads(storage.get("error-ledger"))["errors"]) == 1
        assert [type(e) for e in events] == [ErrorAdded]

    def test_non_json_values_are_persisted_and_exported(self, ledger: ErrorLedger, storage: MemoryStorage) -> None:
        ledger.add_error(ValueError("first"))
        entry = ledger.add_error(
            ValueError("second"),
            {
                "handle": Opaque(),
                "nested": {"when": datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc), "ids": (1, 2)},
            },
        )
        ledger.add_error(ValueError("third"))

        assert entry.context["handle"] == "<Opaque handle>"
        assert entry.context["nested"] == {"when": "2025-01-15T12:00:00Z", "ids": [1, 2]}
        assert len(json.loads(storage.get("error-ledger"))["errors"]) == 3
        exported = json.loads(ledger.export_errors())
        assert [e["error"]["message"] for e in exported["errors"]] == ["third", "second", "first"]

    def test_logger_failure_leaves_ledger_consistent(self, storage: MemoryStorage, environment) -> None:
        broken_logger = MagicMock()
        broken_logger.log.side_effect = RuntimeError("logger is broken")
        ledger = ErrorLedger(storage=storage, structured_logger=broken_logger, environment=environment)
        events = []
        ledger.subscribe(events.append)

        entry = ledger.add_error(ValueError("kept"))

        assert ledger.get_error_by_id(entry.id) is not None
        assert (ledger.error_count, ledger.unresolved_count) == (1, 1)
        assert len(json.loads(storage.get("error-ledger"))["errors"]) == 1
        assert [type(e) for e in events] == [ErrorAdded]
