"""Presentation layer: the HTTP monitoring API over the capture pipeline."""

from .app import create_app

__all__ = ["create_app"]
