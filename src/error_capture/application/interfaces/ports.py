"""Ports the capture pipeline depends on.

Implementations live in ``infrastructure``; tests substitute in-memory ones
so no real file, network or process state is touched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any


class KeyValueStorage(ABC):
    """Durable string storage addressed by key."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if the key is absent.

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the backing store cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``. Deleting an absent key is not an error."""
        pass


class RemoteSink(ABC):
    """Best-effort delivery of log records to a remote collector."""

    @abstractmethod
    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        """Queue ``payload`` for delivery to ``endpoint`` and return immediately.

        Must never raise; delivery failures are reported as diagnostics only.
        """
        pass

    def close(self) -> None:
        """Release resources held by the sink."""
        return None


class EnvironmentSnapshot(ABC):
    """Ambient facts attached to every captured failure."""

    @property
    @abstractmethod
    def url(self) -> str | None:
        """Location the failure happened at."""
        pass

    @property
    @abstractmethod
    def user_agent(self) -> str | None:
        """Description of the runtime that produced the failure."""
        pass

    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware datetime."""
        pass

