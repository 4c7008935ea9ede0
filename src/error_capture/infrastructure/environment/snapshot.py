"""Environment snapshots and the process-level hard reset."""

from __future__ import annotations

import os
import platform
import socket
import sys
from datetime import UTC, datetime

import structlog

from ...application.interfaces import EnvironmentSnapshot

logger = structlog.get_logger(__name__)


class ProcessEnvironment(EnvironmentSnapshot):
    """Describes the running interpreter.

    ``url`` identifies the host and program, ``user_agent`` the interpreter
    and platform. Both are computed once; only ``now`` changes per event.
    """

    def __init__(self, url: str | None = None, user_agent: str | None = None) -> None:
        program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "python"
        self._url = url or f"process://{socket.gethostname()}/{program}?pid={os.getpid()}"
        self._user_agent = user_agent or (
            f"{platform.python_implementation()}/{platform.python_version()} "
            f"({platform.system()} {platform.release()}; {platform.machine()})"
        )

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    def now(self) -> datetime:
        return datetime.now(UTC)


class StaticEnvironment(EnvironmentSnapshot):
    """Fixed url and user agent, for tests and for callers that know better."""

    def __init__(self, url: str | None = None, user_agent: str | None = None) -> None:
        self._url = url
        self._user_agent = user_agent

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def user_agent(self) -> str | None:
        return self._user_agent

    def now(self) -> datetime:
        return datetime.now(UTC)


def restart_process() -> None:
    """Replace the current process with a fresh copy of itself."""
    logger.warning("Restarting process after exhausting capture boundary retries", argv=sys.argv)
    sys.stdout.flush()
    sys.stderr.flush()
    os.execv(sys.executable, [sys.executable, *sys.argv])
