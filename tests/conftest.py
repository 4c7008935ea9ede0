"""
Pytest configuration and shared fixtures for error capture tests.

Unit tests get in-memory collaborators (storage, a fixed environment
snapshot, a recording remote sink); API tests get an application built on a
container whose file storage lives in a per-test temporary directory.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
from freezegun import freeze_time

# Set test environment before imports
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["LOGGER_CONSOLE_ENABLED"] = "false"

from error_capture.application.interfaces import RemoteSink
from error_capture.application.services import CaptureService, ErrorLedger
from error_capture.core.config import Settings
from error_capture.core.container import Container, create_container
from error_capture.infrastructure.environment import StaticEnvironment
from error_capture.infrastructure.logging import LoggerConfig, StructuredLogger
from error_capture.infrastructure.monitoring import MetricsCollector
from error_capture.infrastructure.storage import MemoryStorage
from error_capture.presentation import create_app

TEST_URL = "process://test-host/pytest?pid=4242"
TEST_USER_AGENT = "CPython/3.12.1 (Linux 6.1; x86_64)"


class RecordingRemoteSink(RemoteSink):
    """Remote sink that keeps what it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        self.sent.append((endpoint, payload))

    def close(self) -> None:
        self.closed = True


class RecordingCapture:
    """Stand-in for the capture entry point that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[BaseException, dict[str, Any], Any]] = []

    def __call__(self, error: BaseException, context: dict[str, Any] | None = None, origin: Any = None) -> None:
        self.calls.append((error, dict(context or {}), origin))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def environment() -> StaticEnvironment:
    return StaticEnvironment(url=TEST_URL, user_agent=TEST_USER_AGENT)


@pytest.fixture
def remote_sink() -> RecordingRemoteSink:
    return RecordingRemoteSink()


@pytest.fixture
def recording_capture() -> RecordingCapture:
    return RecordingCapture()


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture
def structured_logger(storage: MemoryStorage, environment: StaticEnvironment) -> StructuredLogger:
    """Logger accepting every level, with the console sink off."""
    return StructuredLogger(LoggerConfig(enable_console=False), storage=storage, environment=environment)


@pytest.fixture
def ledger(storage: MemoryStorage, structured_logger: StructuredLogger, environment: StaticEnvironment) -> ErrorLedger:
    return ErrorLedger(storage=storage, structured_logger=structured_logger, environment=environment)


@pytest.fixture
def capture_service(ledger: ErrorLedger, environment: StaticEnvironment, metrics: MetricsCollector) -> CaptureService:
    return CaptureService(ledger, environment=environment, metrics=metrics)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        ENVIRONMENT="development",
        STORAGE_DIR=str(tmp_path / "store"),
        LOGGER_CONSOLE_ENABLED=False,
        REMOTE_ENABLED=False,
    )


@pytest.fixture
def container(settings: Settings, environment: StaticEnvironment) -> Generator[Container, None, None]:
    container = create_container(settings)
    container.environment.override(providers.Object(environment))
    yield container
    container.reset_singletons()


@pytest.fixture
def app(container: Container) -> FastAPI:
    return create_app(container=container)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def frozen_time():
    """Freeze time for deterministic timestamps and export file names."""
    with freeze_time("2025-01-15 12:00:00", tick=True):
        yield


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: integration test")
