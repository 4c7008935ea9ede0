"""Dependency injection container for the error capture pipeline.

Everything the pipeline shares (storage, logger, ledger, capture entry
point, global hooks) is an application-scoped singleton built here and
handed to callers by reference.
"""

from __future__ import annotations

from dependency_injector import containers, providers

from ..application.boundary import CaptureBoundary, GlobalCaptureInstaller
from ..application.interfaces import KeyValueStorage, RemoteSink
from ..application.services import CaptureService, ErrorLedger
from ..infrastructure.environment import ProcessEnvironment, restart_process
from ..infrastructure.logging import LoggerConfig, StructuredLogger
from ..infrastructure.monitoring import MetricsCollector, MetricsConfig
from ..infrastructure.remote import HttpRemoteSink
from ..infrastructure.storage import FileStorage, MemoryStorage
from .config import Settings, get_settings


def build_storage(enabled: bool, directory: str) -> KeyValueStorage:
    """File storage under ``directory``, or a process-local store when disabled."""
    if enabled:
        return FileStorage(directory)
    return MemoryStorage()


def build_remote_sink(
    enabled: bool,
    timeout: float,
    failure_threshold: int,
    recovery_timeout: float,
    metrics: MetricsCollector,
) -> RemoteSink | None:
    if not enabled:
        return None
    return HttpRemoteSink(
        timeout=timeout,
        failure_threshold=failure_threshold,
        recovery_timeout=recovery_timeout,
        on_failure=metrics.record_sink_failure,
    )


class Container(containers.DeclarativeContainer):
    """Main DI container for the application."""

    # Configuration
    config = providers.Configuration()
    settings = providers.Dependency(instance_of=Settings)

    # Infrastructure services
    metrics_config = providers.Factory(
        MetricsConfig,
        enable_prometheus=config.METRICS_ENABLED,
        metric_prefix="error_capture",
    )

    metrics_collector = providers.Singleton(MetricsCollector, config=metrics_config)

    environment = providers.Singleton(ProcessEnvironment)

    storage = providers.Singleton(build_storage, enabled=config.STORAGE_ENABLED, directory=config.STORAGE_DIR)

    remote_sink = providers.Singleton(
        build_remote_sink,
        enabled=config.REMOTE_ENABLED,
        timeout=config.REMOTE_TIMEOUT,
        failure_threshold=config.REMOTE_FAILURE_THRESHOLD,
        recovery_timeout=config.REMOTE_RECOVERY_TIMEOUT,
        metrics=metrics_collector,
    )

    logger_config = providers.Factory(
        LoggerConfig,
        max_entries=config.LOGGER_MAX_ENTRIES,
        enable_console=config.LOGGER_CONSOLE_ENABLED,
        enable_storage=config.STORAGE_ENABLED,
        enable_remote=config.REMOTE_ENABLED,
        remote_endpoint=config.REMOTE_ENDPOINT,
        filter_levels=config.LOGGER_FILTER_LEVELS,
    )

    structured_logger = providers.Singleton(
        StructuredLogger,
        config=logger_config,
        storage=storage,
        remote_sink=remote_sink,
        environment=environment,
        on_sink_failure=metrics_collector.provided.record_sink_failure,
    )

    # Application services
    error_ledger = providers.Singleton(
        ErrorLedger,
        storage=storage,
        structured_logger=structured_logger,
        environment=environment,
        max_entries=config.LEDGER_MAX_ENTRIES,
        on_change=metrics_collector.provided.set_ledger_size,
    )

    capture_service = providers.Singleton(
        CaptureService,
        ledger=error_ledger,
        environment=environment,
        metrics=metrics_collector,
    )

    global_capture = providers.Singleton(GlobalCaptureInstaller, capture=capture_service)

    # A fresh boundary per guarded region
    capture_boundary = providers.Factory(
        CaptureBoundary,
        capture=capture_service,
        hard_reset=providers.Object(restart_process),
        max_retries=config.BOUNDARY_MAX_RETRIES,
        metrics=metrics_collector,
    )


def create_container(settings: Settings | None = None) -> Container:
    """Build a container wired from ``settings``.

    Args:
        settings: Application settings (the cached settings if None)

    Returns:
        A container whose singletons are created on first use
    """
    settings = settings or get_settings()
    container = Container(settings=providers.Object(settings))
    container.config.from_dict(settings.model_dump())
    return container
