"""Capture middleware: routes failing with an unexpected exception are recorded."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from structlog import get_logger

from ...domain.enums import CaptureLevel, CaptureOrigin

logger = get_logger(__name__)


class CaptureMiddleware(BaseHTTPMiddleware):
    """Funnel exceptions escaping a route into the capture entry point.

    ``HTTPException`` and registered exception handlers never reach this
    middleware; only genuine failures do. They are captured at level ``page``
    and answered with a structured 500 body.
    """

    def __init__(self, app, debug: bool = False):
        """Initialize capture middleware.

        Args:
            app: FastAPI application instance
            debug: Whether to include the exception type and message in responses
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        request_id = getattr(request.state, "request_id", "unknown")
        context = {
            "level": CaptureLevel.PAGE.value,
            "method": request.method,
            "path": request.url.path,
            "requestId": request_id,
        }

        container = getattr(request.app.state, "container", None)
        if container is not None:
            container.capture_service().capture(exc, context, origin=CaptureOrigin.REQUEST)
        else:
            logger.error("Unhandled request failure with no capture service", exc_info=exc, **context)

        body: dict[str, Any] = {
            "error": True,
            "error_code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "request_id": request_id,
            "path": request.url.path,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        if self.debug:
            body["details"] = {"error_type": type(exc).__name__, "error_message": str(exc)}

        return JSONResponse(status_code=500, content=body)
