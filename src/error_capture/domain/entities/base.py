"""Shared configuration for persisted record models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic_core import to_jsonable_python


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so records stay orderable against each other."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def jsonable_mapping(value: Any) -> Any:
    """Coerce a free-form mapping to JSON-safe values; unknown objects become their ``repr``."""
    if not isinstance(value, dict):
        return value
    return to_jsonable_python(value, fallback=repr)


class RecordModel(BaseModel):
    """Base for records that round-trip through storage and export files.

    Field names are snake_case in Python and camelCase on disk.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with on-disk field names and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)
