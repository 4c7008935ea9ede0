"""Fire-and-forget HTTP delivery of log records."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx
import structlog

from ...application.interfaces import RemoteSink
from ...core.exceptions import RemoteSinkError
from .circuit_breaker import CircuitBreaker, CircuitBreakerError

logger = structlog.get_logger(__name__)


class HttpRemoteSink(RemoteSink):
    """POSTs each record as JSON from a single background worker.

    ``send`` only queues the record, so a slow or unreachable collector never
    blocks or fails the logging call. Failures are reported to the diagnostics
    logger and to ``on_failure``; after ``failure_threshold`` consecutive
    failures the circuit opens and records are dropped until
    ``recovery_timeout`` has passed.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="remote-log-sink")
        self._closed = False
        self._lock = threading.Lock()
        self._on_failure = on_failure
        self.circuit_breaker = CircuitBreaker(
            name="remote_log_sink",
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
            expected_exception=(httpx.HTTPError, RemoteSinkError),
        )

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        with self._lock:
            if self._closed:
                logger.debug("Remote sink closed, dropping log record", endpoint=endpoint)
                return
            self._executor.submit(self._deliver, endpoint, payload)

    def _deliver(self, endpoint: str, payload: dict[str, Any]) -> None:
        try:
            self.circuit_breaker.call(self._post, endpoint, payload)
        except CircuitBreakerError as e:
            logger.debug("Remote sink circuit open, dropping log record", endpoint=endpoint, failures=e.failure_count)
        except Exception as e:
            logger.warning(
                "Failed to send log to remote endpoint",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            if self._on_failure is not None:
                self._on_failure("remote")

    def _post(self, endpoint: str, payload: dict[str, Any]) -> None:
        response = self._client.post(endpoint, json=payload)
        if response.status_code >= 400:
            raise RemoteSinkError(
                f"Remote collector answered {response.status_code}",
                details={"endpoint": endpoint, "status_code": response.status_code},
            )

    def close(self) -> None:
        """Wait for queued deliveries, then release the worker and the HTTP client."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        self._client.close()
