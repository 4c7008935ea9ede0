"""Application services: the error ledger and the capture entry point."""

from .capture_service import CaptureHandler, CaptureObserver, CaptureService, capture_handler
from .error_ledger import STORAGE_KEY, ErrorLedger

__all__ = [
    "CaptureHandler",
    "CaptureObserver",
    "CaptureService",
    "ErrorLedger",
    "STORAGE_KEY",
    "capture_handler",
]
