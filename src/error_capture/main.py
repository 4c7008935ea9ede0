"""
Error Capture - Application Launcher.

Entry point for running the monitoring API with uvicorn. Shutdown is left to
uvicorn's own signal handling, which runs the application lifespan.
"""

from typing import Any

import uvicorn
from fastapi import FastAPI

from .core.config import get_logger, get_settings
from .presentation import create_app


class ApplicationManager:
    """Holds the single application instance served by this process."""

    def __init__(self) -> None:
        self.app: FastAPI | None = None
        self.logger = get_logger("app.manager")

    def create_application(self) -> FastAPI:
        if self.app is None:
            self.logger.info("Creating new application instance")
            self.app = create_app()
        return self.app


app_manager = ApplicationManager()


def get_server_config(host: str, port: int, **kwargs: Any) -> dict[str, Any]:
    """uvicorn options for the current settings, overridden by ``kwargs``."""
    settings = get_settings()
    config: dict[str, Any] = {
        "host": host,
        "port": port,
        "log_level": settings.LOG_LEVEL.value.lower(),
        "access_log": True,
        "server_header": False,
    }
    config.update(kwargs)
    return config


def get_application() -> FastAPI:
    """Create (once) the application instance for ASGI servers."""
    return app_manager.create_application()


def run_development_server(host: str | None = None, port: int | None = None, reload: bool = False, **kwargs: Any) -> None:
    """Run uvicorn in the foreground.

    Args:
        host: Bind address (defaults to ``API_HOST``)
        port: Bind port (defaults to ``API_PORT``)
        reload: Enable auto-reload; the app is then loaded by import string
        **kwargs: Additional uvicorn options
    """
    settings = get_settings()
    settings.setup_logging()
    logger = get_logger("app.dev")

    host = host or settings.API_HOST
    port = port or settings.API_PORT
    logger.info("Starting server", host=host, port=port, reload=reload, environment=settings.ENVIRONMENT.value)

    config = get_server_config(host=host, port=port, **kwargs)
    try:
        if reload:
            uvicorn.run("error_capture.main:get_application", factory=True, reload=True, reload_dirs=["src"], **config)
        else:
            uvicorn.run(get_application(), **config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
