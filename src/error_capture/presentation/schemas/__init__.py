"""API request and response schemas."""

from .requests import LoggerConfigUpdate, ReportRequest
from .responses import HealthResponse, ImportResult, LoggerConfigResponse, ReportAccepted

__all__ = [
    "LoggerConfigUpdate",
    "ReportRequest",
    "HealthResponse",
    "ImportResult",
    "LoggerConfigResponse",
    "ReportAccepted",
]
