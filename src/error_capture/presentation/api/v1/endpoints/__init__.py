"""API v1 endpoint routers."""

from . import errors, health, logs, metrics, reports

__all__ = ["errors", "health", "logs", "metrics", "reports"]
