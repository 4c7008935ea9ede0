"""Environment facts attached to captured failures."""

from .snapshot import ProcessEnvironment, StaticEnvironment, restart_process

__all__ = [
    "ProcessEnvironment",
    "StaticEnvironment",
    "restart_process",
]
