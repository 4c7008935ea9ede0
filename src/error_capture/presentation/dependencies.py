"""FastAPI dependencies resolving application-scoped services from the container."""

from fastapi import Depends, Request

from ..application.services import CaptureService, ErrorLedger
from ..core.config import Settings
from ..core.container import Container
from ..application.interfaces import EnvironmentSnapshot
from ..infrastructure.logging import StructuredLogger
from ..infrastructure.monitoring import MetricsCollector


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_app_settings(container: Container = Depends(get_container)) -> Settings:
    return container.settings()


def get_error_ledger(container: Container = Depends(get_container)) -> ErrorLedger:
    return container.error_ledger()


def get_structured_logger(container: Container = Depends(get_container)) -> StructuredLogger:
    return container.structured_logger()


def get_capture_service(container: Container = Depends(get_container)) -> CaptureService:
    return container.capture_service()


def get_metrics_collector(container: Container = Depends(get_container)) -> MetricsCollector:
    return container.metrics_collector()


def get_environment(container: Container = Depends(get_container)) -> EnvironmentSnapshot:
    return container.environment()
