"""Prometheus metrics for the capture pipeline."""

import time
from dataclasses import dataclass
from typing import Any

import structlog
from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

logger = structlog.get_logger(__name__)


@dataclass
class MetricsConfig:
    """Configuration for metrics collection."""

    enable_prometheus: bool = True
    registry: CollectorRegistry | None = None
    metric_prefix: str = "error_capture"


class MetricsCollector:
    """Counts captures, sink failures and boundary transitions."""

    def __init__(self, config: MetricsConfig | None = None) -> None:
        """Initialize metrics collector with configuration."""
        self.config = config or MetricsConfig()
        self.registry = self.config.registry or CollectorRegistry()
        self._start_time = time.time()

        self._init_prometheus_metrics()

    def _init_prometheus_metrics(self) -> None:
        prefix = self.config.metric_prefix

        self.captures_total = Counter(
            f"{prefix}_captures_total",
            "Failures funnelled through the capture entry point",
            labelnames=["origin", "level"],
            registry=self.registry,
        )

        self.sink_failures_total = Counter(
            f"{prefix}_sink_failures_total",
            "Failures of the logging machinery itself, by sink",
            labelnames=["sink"],
            registry=self.registry,
        )

        self.boundary_transitions_total = Counter(
            f"{prefix}_boundary_transitions_total",
            "Capture boundary state transitions",
            labelnames=["scope", "transition"],
            registry=self.registry,
        )

        self.ledger_entries = Gauge(
            f"{prefix}_ledger_entries",
            "Entries currently held by the error ledger",
            registry=self.registry,
        )

        self.ledger_unresolved = Gauge(
            f"{prefix}_ledger_unresolved_entries",
            "Unresolved entries currently held by the error ledger",
            registry=self.registry,
        )

        logger.debug("Prometheus metrics initialized", prefix=prefix)

    def record_capture(self, origin: str, level: str) -> None:
        if not self.config.enable_prometheus:
            return
        self.captures_total.labels(origin=origin, level=level).inc()

    def record_sink_failure(self, sink: str) -> None:
        if not self.config.enable_prometheus:
            return
        self.sink_failures_total.labels(sink=sink).inc()

    def record_boundary_transition(self, scope: str, transition: str) -> None:
        if not self.config.enable_prometheus:
            return
        self.boundary_transitions_total.labels(scope=scope, transition=transition).inc()

    def set_ledger_size(self, entries: int, unresolved: int) -> None:
        if not self.config.enable_prometheus:
            return
        self.ledger_entries.set(entries)
        self.ledger_unresolved.set(unresolved)

    def get_prometheus_metrics(self) -> str:
        """Render metrics in the Prometheus text exposition format."""
        if not self.config.enable_prometheus:
            return ""
        return generate_latest(self.registry).decode("utf-8")

    def get_system_stats(self) -> dict[str, Any]:
        uptime = time.time() - self._start_time
        return {
            "uptime_seconds": uptime,
            "metrics_enabled": self.config.enable_prometheus,
            "metric_prefix": self.config.metric_prefix,
        }
