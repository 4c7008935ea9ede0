"""Exception types synthesized for failures that do not arrive as exceptions."""

from __future__ import annotations


class ReportedError(Exception):
    """A failure reported by message rather than raised.

    Used for manual reports, for example a client posting the name, message
    and stack of an error it caught on its side.
    """

    def __init__(self, message: str, name: str | None = None, stack: str | None = None) -> None:
        super().__init__(message)
        self.reported_name = name
        self.stack = stack


class UnhandledRejectionError(ReportedError):
    """An asynchronous task failed and nothing awaited the failure."""

    def __init__(self, reason: object, stack: str | None = None) -> None:
        super().__init__(f"Unhandled Promise Rejection: {reason}", name=type(self).__name__, stack=stack)
        self.reason = reason
