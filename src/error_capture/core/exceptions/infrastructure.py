"""Infrastructure-specific exception classes."""

from .base import InfrastructureError


class StorageError(InfrastructureError):
    """Raised when the durable key-value storage cannot be read or written."""

    pass


class RemoteSinkError(InfrastructureError):
    """Raised when a log entry cannot be delivered to the remote collector."""

    pass
