"""Remote delivery of log records."""

from .circuit_breaker import CircuitBreaker, CircuitBreakerError, CircuitState
from .http_sink import HttpRemoteSink

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitState",
    "HttpRemoteSink",
]
