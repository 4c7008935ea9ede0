"""File-backed key-value storage: one JSON document per key."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import structlog

from ...application.interfaces import KeyValueStorage
from ...core.exceptions import StorageError

logger = structlog.get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage(KeyValueStorage):
    """Durable storage in a directory, one ``<key>.json`` file per key.

    Writes go to a temporary file that is then renamed over the target, so a
    reader never observes a half-written document. Two processes writing the
    same key still race: the last rename wins and nothing is merged.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: {key!r}", details={"key": key})
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read storage key {key!r}", details={"path": str(path)}) from e

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write storage key {key!r}", details={"path": str(path)}) from e

        logger.debug("Storage key written", key=key, size=len(value))

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove storage key {key!r}", details={"path": str(path)}) from e
