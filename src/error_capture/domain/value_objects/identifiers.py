"""Identifier generation for ledger records, log records and logger sessions."""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


def _random_suffix(length: int = _SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


def new_record_id() -> str:
    """Return a record id unique within a session: ``<epoch ms>-<9 base36 chars>``."""
    return f"{_epoch_ms()}-{_random_suffix()}"


def new_session_id() -> str:
    """Return a logger session id: ``session_<epoch ms>_<9 base36 chars>``."""
    return f"session_{_epoch_ms()}_{_random_suffix()}"
