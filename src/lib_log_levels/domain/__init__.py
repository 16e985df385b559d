"""Domain value objects shared by every layer of the logging facility."""

from __future__ import annotations

from .configs import CONSOLE_PATH, BackendConfig, FileConfig, SyslogConfig
from .errors import InvalidLevelError, LoggingError, UnsupportedBackendError
from .levels import DEFAULT_LEVEL, LogLevel, coerce_level

__all__ = [
    "BackendConfig",
    "CONSOLE_PATH",
    "DEFAULT_LEVEL",
    "FileConfig",
    "InvalidLevelError",
    "LogLevel",
    "LoggingError",
    "SyslogConfig",
    "UnsupportedBackendError",
    "coerce_level",
]
