"""Infrastructure layer for the capture pipeline."""

from .environment import ProcessEnvironment, StaticEnvironment, restart_process
from .logging import LoggerConfig, StructuredLogger
from .monitoring import MetricsCollector, MetricsConfig
from .remote import CircuitBreaker, CircuitBreakerError, CircuitState, HttpRemoteSink
from .storage import FileStorage, MemoryStorage

__all__ = [
    # Logging
    "StructuredLogger",
    "LoggerConfig",
    # Storage
    "FileStorage",
    "MemoryStorage",
    # Remote delivery
    "HttpRemoteSink",
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitState",
    # Environment
    "ProcessEnvironment",
    "StaticEnvironment",
    "restart_process",
    # Monitoring
    "MetricsCollector",
    "MetricsConfig",
]
