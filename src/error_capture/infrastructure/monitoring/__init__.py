"""Monitoring infrastructure for the capture pipeline."""

from .metrics_collector import MetricsCollector, MetricsConfig

__all__ = [
    "MetricsCollector",
    "MetricsConfig",
]
