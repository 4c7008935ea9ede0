"""Single entry point every failure origin funnels into."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import structlog

from ...domain.enums import CaptureOrigin
from ...domain.value_objects import ErrorDetails, ReportedError
from ..interfaces import EnvironmentSnapshot
from .error_ledger import ErrorLedger

if TYPE_CHECKING:
    from ...infrastructure.monitoring import MetricsCollector

logger = structlog.get_logger(__name__)

CaptureObserver = Callable[[BaseException | ErrorDetails, dict[str, Any]], None]
CaptureHandler = Callable[[BaseException, dict[str, Any], CaptureOrigin], None]


class CaptureService:
    """Normalizes a failure and records it in the ledger (and through it, the logger).

    Built once at startup with its collaborators and handed by reference to
    boundaries, the global installer and the HTTP layer. ``capture`` is a
    terminal sink: it never raises and returns nothing callers rely on.
    """

    def __init__(
        self,
        ledger: ErrorLedger,
        environment: EnvironmentSnapshot | None = None,
        metrics: MetricsCollector | None = None,
        observers: Iterable[CaptureObserver] = (),
    ) -> None:
        self._ledger = ledger
        self._environment = environment
        self._metrics = metrics
        self._observers: list[CaptureObserver] = list(observers)

    @property
    def ledger(self) -> ErrorLedger:
        return self._ledger

    def add_observer(self, observer: CaptureObserver) -> None:
        """Forward every captured failure to an external monitor as well."""
        self._observers.append(observer)

    def _enrich(self, context: dict[str, Any] | None) -> dict[str, Any]:
        enriched = dict(context or {})
        env = self._environment
        if env is None:
            return enriched
        enriched["timestamp"] = enriched.get("timestamp") or env.now().isoformat()
        enriched["url"] = enriched.get("url") or env.url
        enriched["userAgent"] = enriched.get("userAgent") or env.user_agent
        return enriched

    def capture(
        self,
        error: BaseException | ErrorDetails,
        context: dict[str, Any] | None = None,
        origin: CaptureOrigin | str = CaptureOrigin.MANUAL,
    ) -> None:
        """Record ``error`` with ``context``. Never raises."""
        try:
            enriched = self._enrich(context)
            self._ledger.add_error(error, enriched)
            if self._metrics is not None:
                self._metrics.record_capture(_origin_label(origin), str(enriched.get("level", "unknown")))
        except Exception as e:
            logger.error("Failed to capture error", error=str(e), captured=str(error), exc_info=True)
            return

        for observer in list(self._observers):
            try:
                observer(error, enriched)
            except Exception as e:
                logger.warning("Capture observer failed", observer=getattr(observer, "__name__", repr(observer)), error=str(e))

    def capture_message(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        name: str | None = None,
        stack: str | None = None,
    ) -> None:
        """Record a failure reported by message, such as a client-side report."""
        self.capture(ReportedError(message, name=name, stack=stack), context, origin=CaptureOrigin.MANUAL)

    __call__ = capture


def _origin_label(origin: CaptureOrigin | str) -> str:
    try:
        return CaptureOrigin(origin).value
    except ValueError:
        return str(origin)


def _accepts_origin(target: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(target).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(p.name == "origin" or p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters)


def capture_handler(target: CaptureService | Callable[..., None]) -> CaptureHandler:
    """Adapt a capture target to ``handler(error, context, origin)``.

    ``target`` is either a ``CaptureService`` or any ``capture(error, context)``
    callable; ``origin`` is only passed on to targets that accept it. The
    returned handler never raises.
    """
    passes_origin = isinstance(target, CaptureService) or _accepts_origin(target)

    def handle(error: BaseException, context: dict[str, Any], origin: CaptureOrigin) -> None:
        try:
            if passes_origin:
                target(error, context, origin=origin)
            else:
                target(error, context)
        except Exception as e:
            logger.error("Capture target failed", error=str(e), captured=str(error), origin=origin.value)

    return handle
