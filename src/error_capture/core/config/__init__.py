from .config import Config, Environment, Settings, get_settings
from .logging import LogFormat, LoggingConfig, LogVerbosity, configure_logging, get_logger

__all__ = [
    "Config",
    "Environment",
    "Settings",
    "get_settings",
    "LogFormat",
    "LoggingConfig",
    "LogVerbosity",
    "configure_logging",
    "get_logger",
]
