"""Export, import and persistence payloads for the ledger and the logger."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...core.exceptions import InvalidImportError, UnsupportedVersionError
from ...domain.entities import ErrorEntry, LogEntry, utc_now

EXPORT_VERSION = "1.0"

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class TransferModel(BaseModel):
    """Base for JSON documents written to storage or handed out as exports."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class ErrorLedgerExport(TransferModel):
    """Export file for the error ledger."""

    errors: list[ErrorEntry]
    export_date: datetime = Field(default_factory=utc_now, alias="exportDate")
    version: str = EXPORT_VERSION


class LogExport(TransferModel):
    """Export file for the structured logger."""

    logs: list[LogEntry]
    session_id: str | None = Field(default=None, alias="sessionId")
    exported_at: datetime = Field(default_factory=utc_now, alias="exportedAt")
    version: str = EXPORT_VERSION


class PersistedLedger(TransferModel):
    """Storage layout of the error ledger."""

    errors: list[ErrorEntry]
    last_saved: datetime = Field(default_factory=utc_now, alias="lastSaved")


class PersistedLogs(TransferModel):
    """Storage layout of the structured logger."""

    logs: list[LogEntry]
    last_updated: datetime = Field(default_factory=utc_now, alias="lastUpdated")
    session_id: str | None = Field(default=None, alias="sessionId")


class LedgerCounts(TransferModel):
    """Derived ledger counters."""

    error_count: int = Field(alias="errorCount")
    unresolved_count: int = Field(alias="unresolvedCount")


class LogStats(TransferModel):
    """Per-level counts over the logger buffer."""

    total: int
    error_count: int = Field(alias="errorCount")
    warn_count: int = Field(alias="warnCount")
    info_count: int = Field(alias="infoCount")
    debug_count: int = Field(alias="debugCount")
    session_id: str = Field(alias="sessionId")


def parse_payload(
    raw: str,
    model: type[PayloadT],
    error_cls: type[InvalidImportError],
    *,
    require_version: bool = False,
) -> PayloadT:
    """Parse and validate a JSON document into ``model``.

    Args:
        raw: JSON text
        model: Payload model to validate against
        error_cls: Exception raised for any parse or shape failure
        require_version: Reject documents whose ``version`` is not ``EXPORT_VERSION``

    Returns:
        The validated payload, with timestamps re-hydrated to datetimes

    Raises:
        error_cls: If the text is not JSON or does not match the model
        UnsupportedVersionError: If ``require_version`` and the version differs
    """
    try:
        data: Any = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise error_cls(details={"reason": f"not valid JSON: {e}"}) from e

    if not isinstance(data, dict):
        raise error_cls(details={"reason": "top-level value must be an object"})

    if require_version and data.get("version") != EXPORT_VERSION:
        raise UnsupportedVersionError(data.get("version"), EXPORT_VERSION)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise error_cls(details={"reason": "shape mismatch", "errors": e.error_count()}) from e
