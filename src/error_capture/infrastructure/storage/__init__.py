"""Durable storage backends."""

from .file_storage import FileStorage
from .memory_storage import MemoryStorage

__all__ = [
    "FileStorage",
    "MemoryStorage",
]
