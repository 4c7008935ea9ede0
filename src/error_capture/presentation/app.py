"""FastAPI application factory with lifespan management and dependency injection."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.config import Environment, Settings, get_settings
from ..core.container import Container, create_container
from ..core.exceptions import InvalidImportError
from .api.v1 import v1_router
from .middleware import setup_middleware

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Install the process-wide capture hooks for the lifetime of the app.

    Args:
        app: FastAPI application instance

    Yields:
        None during application lifetime
    """
    settings: Settings = app.state.settings
    container: Container = app.state.container

    settings.setup_logging()
    logger.info(
        "Starting Error Capture API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT.value,
        storage_dir=settings.STORAGE_DIR if settings.STORAGE_ENABLED else None,
    )

    installer = container.global_capture()
    installer.install(asyncio.get_running_loop())
    structured_logger = container.structured_logger()
    logger.info("Capture pipeline ready", session_id=structured_logger.session_id)

    yield

    logger.info("Shutting down Error Capture API")
    installer.uninstall()
    try:
        structured_logger.close()
    except Exception as e:
        logger.error("Error during application shutdown", error=str(e), error_type=type(e).__name__)


async def invalid_import_handler(request: Request, exc: InvalidImportError) -> JSONResponse:
    """Answer rejected import payloads with 400 and the reason."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.warning("import_rejected", request_id=request_id, error_code=exc.error_code, path=request.url.path)
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(
            {
                "error": True,
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "request_id": request_id,
            }
        ),
    )


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Application settings (the cached settings if None)
        container: Prebuilt container, e.g. with overridden providers in tests

    Returns:
        Configured application
    """
    if settings is None:
        settings = container.settings() if container is not None else get_settings()
    if container is None:
        container = create_container(settings)

    is_production = settings.ENVIRONMENT == Environment.PRODUCTION
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Failure capture, error ledger and structured log API",
        debug=settings.DEBUG,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    setup_middleware(app, settings)
    app.add_exception_handler(InvalidImportError, invalid_import_handler)
    app.include_router(v1_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT.value,
            "status": "online",
            "docs": None if is_production else "/docs",
        }

    return app
