"""In-process key-value storage."""

from __future__ import annotations

from ...application.interfaces import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and for running with persistence disabled."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.write_count += 1

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
