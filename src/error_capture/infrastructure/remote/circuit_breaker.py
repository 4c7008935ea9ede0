"""Circuit breaker guarding the remote log collector."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, rejecting calls
    HALF_OPEN = "half_open"  # Testing if the collector recovered


class CircuitBreakerError(Exception):
    """Raised when the circuit breaker is open."""

    def __init__(self, name: str, failure_count: int, last_failure_time: float):
        super().__init__(f"Circuit breaker '{name}' is OPEN. Failures: {failure_count}, Last failure: {last_failure_time}")
        self.name = name
        self.failure_count = failure_count
        self.last_failure_time = last_failure_time


class CircuitBreaker:
    """Stops calling a failing collector until ``recovery_timeout`` has passed."""

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        expected_exception: type[Exception] | tuple[type[Exception], ...] = Exception,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize circuit breaker.

        Args:
            name: Unique name for this circuit breaker
            failure_threshold: Number of consecutive failures before opening the circuit
            recovery_timeout: Seconds to wait before attempting recovery
            expected_exception: Exception types that count as failures
            clock: Time source, monotonic seconds
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception
        self._clock = clock
        self._lock = threading.Lock()

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._last_failure_time = 0.0
        self._next_attempt_time = 0.0

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute ``func`` with circuit breaker protection.

        Raises:
            CircuitBreakerError: If the circuit is open
            Original exception: If ``func`` fails
        """
        with self._lock:
            if self._state == CircuitState.OPEN:
                if self._clock() < self._next_attempt_time:
                    raise CircuitBreakerError(self.name, self._failure_count, self._last_failure_time)
                self._state = CircuitState.HALF_OPEN

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise
        self._on_success()
        return result

    def _on_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            self._state = CircuitState.CLOSED

    def _on_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = self._clock()

            if self._state == CircuitState.HALF_OPEN or self._failure_count >= self.failure_threshold:
                self._state = CircuitState.OPEN
                self._next_attempt_time = self._last_failure_time + self.recovery_timeout

    def reset(self) -> None:
        """Reset circuit breaker to closed state."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._last_failure_time = 0.0
            self._next_attempt_time = 0.0

    def get_status(self) -> dict[str, Any]:
        """Get circuit breaker status information."""
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "last_failure_time": self._last_failure_time,
            "next_attempt_time": self._next_attempt_time if self._state == CircuitState.OPEN else None,
            "recovery_timeout": self.recovery_timeout,
        }
