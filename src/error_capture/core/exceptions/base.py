"""Base exception classes for the error capture pipeline."""

from typing import Any


class ErrorCaptureError(Exception):
    """Base exception for all errors raised by the capture pipeline itself."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message}. Details: {self.details}"
        return self.message



class ApplicationError(ErrorCaptureError):
    """Base class for application layer errors."""

    pass


class InfrastructureError(ErrorCaptureError):
    """Base class for infrastructure layer errors."""

    pass
