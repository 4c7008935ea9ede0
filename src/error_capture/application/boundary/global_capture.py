"""Process-wide hooks that funnel uncaught failures into the capture entry point."""

from __future__ import annotations

import asyncio
import sys
import threading
import traceback
from collections.abc import Callable
from types import TracebackType
from typing import Any

import structlog

from ...domain.enums import CaptureLevel, CaptureOrigin
from ...domain.value_objects import UnhandledRejectionError
from ..services import CaptureService, capture_handler

logger = structlog.get_logger(__name__)

LoopExceptionHandler = Callable[[asyncio.AbstractEventLoop, dict[str, Any]], object]


def _origin_context(tb: TracebackType | None) -> dict[str, Any]:
    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return {}
    last = frames[-1]
    return {
        "filename": last.filename,
        "lineno": last.lineno,
        "colno": getattr(last, "colno", None),
    }


class GlobalCaptureInstaller:
    """Installs ``sys.excepthook``, ``threading.excepthook`` and an asyncio loop handler.

    Uncaught exceptions (main thread or worker threads) and failures of
    asyncio tasks nobody awaited are all reported through the same capture
    entry point as capture boundaries, at level ``global``. Previously
    installed hooks still run afterwards. ``install`` is idempotent and
    ``uninstall`` restores the hooks that were there before.
    """

    def __init__(self, capture: CaptureService | Callable[..., None], loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._capture = capture_handler(capture)
        self._loop = loop
        self._installed = False

        # bound once so identity checks on uninstall work
        self._excepthook = self._handle_uncaught
        self._threading_excepthook = self._handle_thread_exception
        self._loop_handler = self._handle_loop_exception

        self._previous_excepthook: Callable[..., Any] | None = None
        self._previous_threading_excepthook: Callable[..., Any] | None = None
        self._previous_loop_handler: LoopExceptionHandler | None = None
        self._hooked_loop: asyncio.AbstractEventLoop | None = None

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Install the hooks. Calling it again while installed does nothing.

        Args:
            loop: Event loop to hook; defaults to the one given at construction,
                then to the running loop, if any
        """
        if self._installed:
            return

        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._excepthook

        self._previous_threading_excepthook = threading.excepthook
        threading.excepthook = self._threading_excepthook

        target = loop or self._loop
        if target is None:
            try:
                target = asyncio.get_running_loop()
            except RuntimeError:
                target = None
        if target is not None:
            self._previous_loop_handler = target.get_exception_handler()
            target.set_exception_handler(self._loop_handler)
            self._hooked_loop = target

        self._installed = True
        logger.debug("Global capture hooks installed", asyncio_hooked=target is not None)

    def uninstall(self) -> None:
        """Restore the hooks found at install time. Does nothing if not installed."""
        if not self._installed:
            return

        if sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_excepthook or sys.__excepthook__
        else:
            logger.warning("sys.excepthook was replaced after install, leaving it in place")

        if threading.excepthook == self._threading_excepthook:
            threading.excepthook = self._previous_threading_excepthook or threading.__excepthook__
        else:
            logger.warning("threading.excepthook was replaced after install, leaving it in place")

        loop = self._hooked_loop
        if loop is not None and not loop.is_closed() and loop.get_exception_handler() == self._loop_handler:
            loop.set_exception_handler(self._previous_loop_handler)

        self._previous_excepthook = None
        self._previous_threading_excepthook = None
        self._previous_loop_handler = None
        self._hooked_loop = None
        self._installed = False
        logger.debug("Global capture hooks removed")

    def __enter__(self) -> GlobalCaptureInstaller:
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()

    # --- hooks ---

    def _handle_uncaught(
        self, exc_type: type[BaseException], exc_value: BaseException, tb: TracebackType | None
    ) -> None:
        previous = self._previous_excepthook or sys.__excepthook__
        if self._installed and issubclass(exc_type, Exception):
            context = {"level": CaptureLevel.GLOBAL.value, "type": "uncaught", **_origin_context(tb)}
            self._capture(exc_value, context, CaptureOrigin.UNCAUGHT)
        previous(exc_type, exc_value, tb)

    def _handle_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        previous = self._previous_threading_excepthook or threading.__excepthook__
        if self._installed and args.exc_value is not None and issubclass(args.exc_type, Exception):
            context = {
                "level": CaptureLevel.GLOBAL.value,
                "type": "uncaught",
                "thread": args.thread.name if args.thread is not None else None,
                **_origin_context(args.exc_traceback),
            }
            self._capture(args.exc_value, context, CaptureOrigin.UNCAUGHT)
        previous(args)

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        if self._installed:
            exception = context.get("exception")
            reason: object = exception if exception is not None else context.get("message", "unknown")
            stack = None
            if isinstance(exception, BaseException) and exception.__traceback__ is not None:
                stack = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))

            capture_context: dict[str, Any] = {
                "level": CaptureLevel.GLOBAL.value,
                "type": "unhandledRejection",
                "reason": repr(reason) if isinstance(reason, BaseException) else str(reason),
            }
            if context.get("message"):
                capture_context["message"] = context["message"]
            task = context.get("task") or context.get("future")
            if task is not None:
                capture_context["task"] = repr(task)

            self._capture(UnhandledRejectionError(reason, stack=stack), capture_context, CaptureOrigin.UNHANDLED_REJECTION)

        if self._previous_loop_handler is not None:
            self._previous_loop_handler(loop, context)
        else:
            loop.default_exception_handler(context)
