"""Captured exception, stored by value."""

from __future__ import annotations

import traceback

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetails(BaseModel):
    """Message and stack of a failure, detached from the live exception object.

    Records never hold on to the exception itself: the traceback would keep
    every frame (and every local) of the failing call alive for as long as the
    record sits in the ledger.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Error", description="Exception class name")
    message: str = Field(default="", description="Exception message")
    stack: str | None = Field(default=None, description="Formatted traceback, if any")

    @classmethod
    def from_exception(cls, error: BaseException) -> ErrorDetails:
        """Build details from an exception, formatting its traceback if it has one."""
        stack = None
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        elif getattr(error, "stack", None):
            stack = str(error.stack)
        name = getattr(error, "reported_name", None) or type(error).__name__
        return cls(name=name, message=str(error), stack=stack)

    def __str__(self) -> str:
        return f"{self.name}: {self.message}" if self.message else self.name
