"""Public package surface of the leveled logging facility.

Construct a :class:`Logger` with :func:`new_logger` from one or more backend
configurations, pass it to the code that needs to log, and close it at
shutdown::

    log = new_logger(FileConfig(level="info"), SyslogConfig(tag="svc", level="warning"))
    log.with_context("db").info("connected to %s", dsn)
    log.close()
"""

from __future__ import annotations

from .adapters.stdlib_bridge import StdlibBridgeHandler, attach_stdlib
from .config import configs_from_env, enable_dotenv, logger_from_env
from .domain import (
    CONSOLE_PATH,
    DEFAULT_LEVEL,
    FileConfig,
    InvalidLevelError,
    LoggingError,
    LogLevel,
    SyslogConfig,
    UnsupportedBackendError,
)
from .runtime import Logger, new_logger

__all__ = [
    "CONSOLE_PATH",
    "DEFAULT_LEVEL",
    "FileConfig",
    "InvalidLevelError",
    "LogLevel",
    "Logger",
    "LoggingError",
    "StdlibBridgeHandler",
    "SyslogConfig",
    "UnsupportedBackendError",
    "attach_stdlib",
    "configs_from_env",
    "enable_dotenv",
    "logger_from_env",
    "new_logger",
]
