"""Failure interception: scoped boundaries and process-wide hooks."""

from .capture_boundary import DEFAULT_MAX_RETRIES, CaptureBoundary, FallbackView
from .global_capture import GlobalCaptureInstaller

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "CaptureBoundary",
    "FallbackView",
    "GlobalCaptureInstaller",
]
