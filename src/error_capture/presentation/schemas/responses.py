"""Response schemas for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...application.dtos import LedgerCounts
from ...domain.enums import LogLevel
from ...infrastructure.logging import LoggerConfig


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoggerConfigResponse(CamelSchema):
    """Live structured logger configuration."""

    max_entries: int
    enable_console: bool
    enable_storage: bool
    enable_remote: bool
    remote_endpoint: str | None
    filter_levels: list[LogLevel]

    @classmethod
    def from_config(cls, config: LoggerConfig) -> "LoggerConfigResponse":
        return cls(
            max_entries=config.max_entries,
            enable_console=config.enable_console,
            enable_storage=config.enable_storage,
            enable_remote=config.enable_remote,
            remote_endpoint=config.remote_endpoint,
            filter_levels=config.filter_levels,
        )


class ImportResult(CamelSchema):
    imported: int = Field(..., description="Entries held after the import")


class ReportAccepted(CamelSchema):
    accepted: bool = True


class HealthResponse(CamelSchema):
    """Liveness of the service and a summary of the capture pipeline."""

    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime
    ledger: LedgerCounts
    session_id: str
