"""Application-specific exception classes."""

from typing import Any

from .base import ApplicationError


class InvalidImportError(ApplicationError):
    """Base exception for rejected export payloads."""

    pass


class InvalidLogDataError(InvalidImportError):
    """Raised when a log export payload cannot be imported."""

    def __init__(self, message: str = "Invalid log data format", **kwargs: Any) -> None:
        super().__init__(message, "INVALID_LOG_DATA", **kwargs)


class InvalidErrorDataError(InvalidImportError):
    """Raised when an error ledger export payload cannot be imported."""

    def __init__(self, message: str = "Invalid error data format", **kwargs: Any) -> None:
        super().__init__(message, "INVALID_ERROR_DATA", **kwargs)


class UnsupportedVersionError(InvalidLogDataError, InvalidErrorDataError):
    """Raised when an export payload carries a version this build cannot read."""

    def __init__(self, version: object, supported: str) -> None:
        ApplicationError.__init__(
            self,
            f"Unsupported export version: {version!r}",
            "UNSUPPORTED_VERSION",
            {"version": version, "supported": supported},
        )
