"""Failure interception around a guarded region, with bounded retry."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from ...domain.enums import BoundaryState, CaptureLevel, CaptureOrigin
from ...domain.value_objects import ErrorDetails
from ..services import CaptureService, capture_handler

if TYPE_CHECKING:
    from ...infrastructure.monitoring import MetricsCollector

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 3

FallbackRenderer = Callable[[ErrorDetails, Callable[[], Any]], Any]
ErrorCallback = Callable[[BaseException, dict[str, Any]], None]


@dataclass(frozen=True)
class FallbackView:
    """What a degraded boundary renders when no custom fallback is given."""

    error: ErrorDetails
    component_stack: str | None
    retry_count: int
    max_retries: int
    retry: Callable[[], Any]

    @property
    def can_retry(self) -> bool:
        return self.retry_count < self.max_retries


class CaptureBoundary:
    """Two-state machine around a guarded region.

    ``Healthy`` renders the region. When the region raises, the boundary moves
    to ``Degraded``, records the failure through the capture entry point and
    renders a fallback instead. ``retry`` goes back to ``Healthy`` at most
    ``max_retries`` times; past that it calls ``hard_reset`` and stays
    ``Degraded``.
    """

    def __init__(
        self,
        capture: CaptureService | Callable[..., None],
        name: str = "boundary",
        scope: CaptureLevel | str = CaptureLevel.COMPONENT,
        fallback: FallbackRenderer | None = None,
        on_error: ErrorCallback | None = None,
        hard_reset: Callable[[], None] | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        metrics: MetricsCollector | None = None,
    ) -> None:
        """Initialize a healthy boundary.

        Args:
            capture: Capture entry point failures are reported to; either a
                ``CaptureService`` or a ``capture(error, context)`` callable
            name: Boundary name recorded in the capture context
            scope: Capture level recorded for failures in this region
            fallback: Custom degraded view, called with ``(error, retry)``
            on_error: Called with ``(exception, error_info)`` after each capture
            hard_reset: Called when retry is requested with no retries left
            max_retries: In-process retries allowed before the hard reset
            metrics: Metrics collector for transition counts
        """
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        self._capture = capture_handler(capture)
        self.name = name
        self.scope = CaptureLevel(scope)
        self._fallback = fallback
        self._on_error = on_error
        self._hard_reset = hard_reset
        self.max_retries = max_retries
        self._metrics = metrics

        self._state = BoundaryState.HEALTHY
        self._error: ErrorDetails | None = None
        self._error_info: dict[str, Any] | None = None
        self._retry_count = 0
        self._region: tuple[Callable[..., Any], tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def state(self) -> BoundaryState:
        return self._state

    @property
    def is_degraded(self) -> bool:
        return self._state == BoundaryState.DEGRADED

    @property
    def error(self) -> ErrorDetails | None:
        return self._error

    @property
    def error_info(self) -> dict[str, Any] | None:
        return self._error_info

    @property
    def retry_count(self) -> int:
        return self._retry_count

    def render(self, region: Callable[..., Any] | None = None, *args: Any, **kwargs: Any) -> Any:
        """Render ``region`` (or the last region rendered) through the boundary.

        Returns:
            The region's result while healthy, the degraded view otherwise

        Raises:
            ValueError: If no region was ever given
        """
        if region is not None:
            self._region = (region, args, kwargs)

        if self._state == BoundaryState.DEGRADED:
            return self._degraded_view()

        if self._region is None:
            raise ValueError(f"Capture boundary '{self.name}' has no region to render")

        func, region_args, region_kwargs = self._region
        try:
            return func(*region_args, **region_kwargs)
        except Exception as exc:
            self._fail(exc)
            return self._degraded_view()

    __call__ = render

    def wrap(self, region: Callable[..., Any]) -> Callable[..., Any]:
        """Decorate ``region`` so every call renders through this boundary."""

        @functools.wraps(region)
        def guarded(*args: Any, **kwargs: Any) -> Any:
            return self.render(region, *args, **kwargs)

        return guarded

    def retry(self) -> Any:
        """Leave the degraded state and re-render, or hard reset when out of retries."""
        if self._state == BoundaryState.HEALTHY:
            return self.render() if self._region is not None else None

        if self._retry_count < self.max_retries:
            self._state = BoundaryState.HEALTHY
            self._error = None
            self._error_info = None
            self._retry_count += 1
            self._record_transition("retry")
            logger.debug("Capture boundary retrying", boundary=self.name, retry_count=self._retry_count)
            return self.render()

        self._record_transition("hard_reset")
        logger.warning(
            "Capture boundary out of retries",
            boundary=self.name,
            retry_count=self._retry_count,
            max_retries=self.max_retries,
        )
        if self._hard_reset is not None:
            self._hard_reset()
        return self._degraded_view()

    def reset(self) -> None:
        """Return to a fresh healthy state, as when the region is mounted anew."""
        self._state = BoundaryState.HEALTHY
        self._error = None
        self._error_info = None
        self._retry_count = 0

    def _fail(self, exc: Exception) -> None:
        details = ErrorDetails.from_exception(exc)
        self._state = BoundaryState.DEGRADED
        self._error = details
        self._error_info = {"componentStack": details.stack}
        self._record_transition("degraded")

        self._capture(
            exc,
            {
                "componentStack": details.stack,
                "level": self.scope.value,
                "boundary": self.name,
                "retryCount": self._retry_count,
            },
            CaptureOrigin.BOUNDARY,
        )

        if self._on_error is not None:
            try:
                self._on_error(exc, dict(self._error_info))
            except Exception as e:
                logger.warning("Capture boundary on_error callback failed", boundary=self.name, error=str(e))

    def _degraded_view(self) -> Any:
        error = self._error
        if error is None:
            raise RuntimeError(f"Capture boundary '{self.name}' has no failure to render")
        if self._fallback is not None:
            return self._fallback(error, self.retry)
        return FallbackView(
            error=error,
            component_stack=(self._error_info or {}).get("componentStack"),
            retry_count=self._retry_count,
            max_retries=self.max_retries,
            retry=self.retry,
        )

    def _record_transition(self, transition: str) -> None:
        if self._metrics is not None:
            self._metrics.record_boundary_transition(self.scope.value, transition)
