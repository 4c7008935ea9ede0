"""Core module containing cross-cutting concerns."""

from .config import Config, Settings, get_settings
from .exceptions import (
    ApplicationError,
    ErrorCaptureError,
    InfrastructureError,
    InvalidErrorDataError,
    InvalidImportError,
    InvalidLogDataError,
    RemoteSinkError,
    StorageError,
    UnsupportedVersionError,
)

__all__ = [
    # Configuration
    "Config",
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCaptureError",
    "ApplicationError",
    "InfrastructureError",
    "InvalidImportError",
    "InvalidLogDataError",
    "InvalidErrorDataError",
    "UnsupportedVersionError",
    "StorageError",
    "RemoteSinkError",
]
