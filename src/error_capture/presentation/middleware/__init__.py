"""Middleware components for request/response processing."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ...core.config import Environment, Settings
from .capture import CaptureMiddleware
from .request_id import RequestIDMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the FastAPI application.

    Middleware is executed in reverse order of addition, so the request ID
    is assigned before the capture middleware sees the request.

    Args:
        app: FastAPI application instance
        settings: Application settings for middleware configuration
    """
    app.add_middleware(CaptureMiddleware, debug=settings.ENVIRONMENT != Environment.PRODUCTION)

    app.add_middleware(RequestIDMiddleware)

    if settings.ENVIRONMENT == Environment.DEVELOPMENT:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
            allow_headers=["*"],
        )


__all__ = [
    "setup_middleware",
    "CaptureMiddleware",
    "RequestIDMiddleware",
]
