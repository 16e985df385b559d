"""Exceptions raised while constructing a logger.

Only construction can fail: once a :class:`~lib_log_levels.runtime.Logger`
exists its leveled calls never raise.
"""

from __future__ import annotations

from typing import Any


class LoggingError(Exception):
    """Base class for errors raised by :mod:`lib_log_levels`."""


class InvalidLevelError(LoggingError, ValueError):
    """An unrecognised level name was supplied.

    Examples
    --------
    >>> str(InvalidLevelError("verbose"))
    "invalid logging level: 'verbose'"
    """

    def __init__(self, name: Any) -> None:
        self.name = name
        super().__init__(f"invalid logging level: {name!r}")


class UnsupportedBackendError(LoggingError, TypeError):
    """A configuration object did not match any known backend kind."""

    def __init__(self, config: Any) -> None:
        self.config = config
        super().__init__(f"unsupported backend configuration: {type(config).__name__}")


__all__ = ["InvalidLevelError", "LoggingError", "UnsupportedBackendError"]
