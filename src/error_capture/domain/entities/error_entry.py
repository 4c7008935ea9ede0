"""Resolvable ledger record."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..value_objects.error_details import ErrorDetails
from ..value_objects.identifiers import new_record_id
from .base import RecordModel, ensure_aware, jsonable_mapping, utc_now


class ErrorEntry(RecordModel):
    """A captured failure held in the error ledger.

    Entries are immutable; the ledger swaps in a copy when an entry is
    resolved, so ``id`` never changes once appended and ``resolved`` only
    ever goes from ``False`` to ``True``.
    """

    id: str = Field(default_factory=new_record_id, min_length=1)
    error: ErrorDetails
    context: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)
    resolved: bool = False
    retry_count: int | None = Field(default=None, alias="retryCount", ge=0)

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @field_validator("context", mode="before")
    @classmethod
    def normalize_context(cls, v: Any) -> Any:
        return jsonable_mapping(v)

    @property
    def level(self) -> str | None:
        """Capture scope recorded in the context, if any."""
        return self.context.get("level")

    def as_resolved(self) -> ErrorEntry:
        """Return a resolved copy of this entry."""
        return self.model_copy(update={"resolved": True})
