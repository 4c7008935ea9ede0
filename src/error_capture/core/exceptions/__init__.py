"""Core exception classes for the error capture pipeline.

Failures being captured are plain application exceptions and never use this
hierarchy. These classes describe failures of the capture machinery itself.
"""

from .application import (
    InvalidErrorDataError,
    InvalidImportError,
    InvalidLogDataError,
    UnsupportedVersionError,
)
from .base import (
    ApplicationError,
    ErrorCaptureError,
    InfrastructureError,
)
from .infrastructure import RemoteSinkError, StorageError

__all__ = [
    # Base exceptions
    "ErrorCaptureError",
    "ApplicationError",
    "InfrastructureError",
    # Application exceptions
    "InvalidImportError",
    "InvalidLogDataError",
    "InvalidErrorDataError",
    "UnsupportedVersionError",
    # Infrastructure exceptions
    "StorageError",
    "RemoteSinkError",
]
