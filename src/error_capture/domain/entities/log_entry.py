"""Leveled structured log record."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..enums import LogLevel
from ..value_objects.error_details import ErrorDetails
from ..value_objects.identifiers import new_record_id
from .base import RecordModel, ensure_aware, jsonable_mapping, utc_now


class LogEntry(RecordModel):
    """A record in the structured logger's ring buffer."""

    id: str = Field(default_factory=new_record_id, min_length=1)
    timestamp: datetime = Field(default_factory=utc_now)
    level: LogLevel
    message: str
    error: ErrorDetails | None = None
    context: dict[str, Any] | None = None
    stack: str | None = None
    user_agent: str | None = Field(default=None, alias="userAgent")
    url: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    session_id: str | None = Field(default=None, alias="sessionId")
    metadata: dict[str, Any] | None = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @field_validator("context", "metadata", mode="before")
    @classmethod
    def normalize_mappings(cls, v: Any) -> Any:
        return jsonable_mapping(v)

    @field_validator("user_id", mode="before")
    @classmethod
    def stringify_user_id(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)
