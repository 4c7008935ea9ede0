"""Structured, leveled log buffer."""

from .structured_logger import STORAGE_KEY, LoggerConfig, StructuredLogger

__all__ = [
    "StructuredLogger",
    "LoggerConfig",
    "STORAGE_KEY",
]
