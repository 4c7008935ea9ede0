"""Request schemas for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.enums import LogLevel


class ReportRequest(BaseModel):
    """A failure reported by a client that has no capture pipeline of its own."""

    message: str = Field(..., min_length=1, max_length=10000, description="Error message")
    name: str | None = Field(None, max_length=200, description="Error type name, defaults to 'Error'")
    stack: str | None = Field(None, description="Stack trace as reported by the client")
    context: dict[str, Any] | None = Field(None, description="Free-form context recorded with the failure")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Cannot read properties of undefined (reading 'id')",
                "name": "TypeError",
                "context": {"level": "component", "component": "OrderSummary"},
            }
        }
    )


class LoggerConfigUpdate(BaseModel):
    """Partial update of the structured logger configuration. Omitted fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    max_entries: int | None = Field(None, ge=1, le=100_000)
    enable_console: bool | None = None
    enable_storage: bool | None = None
    enable_remote: bool | None = None
    remote_endpoint: str | None = None
    filter_levels: list[LogLevel] | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
