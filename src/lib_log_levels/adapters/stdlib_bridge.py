"""Bridge routing stdlib :mod:`logging` records into a :class:`Logger`.

Third-party libraries log through :mod:`logging`; installing
:class:`StdlibBridgeHandler` sends their records through the same backends
and thresholds as the host's own messages. Records emitted by this package's
own loggers are not forwarded, since they describe the backends themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lib_log_levels.domain.levels import LogLevel

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_levels.runtime import Logger

_OWN_LOGGER_PREFIX = __name__.split(".", 1)[0]


def _is_own_record(record: logging.LogRecord) -> bool:
    """Return ``True`` for records from the ``lib_log_levels`` logger hierarchy.

    Examples
    --------
    >>> make = lambda name: logging.LogRecord(name, logging.DEBUG, __file__, 1, "msg", None, None)
    >>> _is_own_record(make("lib_log_levels.application.use_cases.dispatch"))
    True
    >>> _is_own_record(make("lib_log_levels_extra"))
    False
    """

    return record.name == _OWN_LOGGER_PREFIX or record.name.startswith(_OWN_LOGGER_PREFIX + ".")


class StdlibBridgeHandler(logging.Handler):
    """``logging.Handler`` forwarding each record to a :class:`Logger`.

    The record's logger name becomes the context unless the target logger
    already carries one.
    """

    def __init__(self, logger: "Logger", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        if _is_own_record(record):
            return
        try:
            message = self.format(record)
        except Exception:  # noqa: BLE001
            self.handleError(record)
            return
        target = self._logger if self._logger.context else self._logger.with_context(record.name)
        target.log(LogLevel.from_python_level(record.levelno), message)


def attach_stdlib(logger: "Logger", name: str | None = None, level: int = logging.DEBUG) -> StdlibBridgeHandler:
    """Install a bridge handler on the stdlib logger ``name`` and return it.

    ``name=None`` targets the root logger. Remove the handler with
    ``logging.getLogger(name).removeHandler(handler)``.
    """

    handler = StdlibBridgeHandler(logger)
    target = logging.getLogger(name)
    target.addHandler(handler)
    target.setLevel(level)
    return handler


__all__ = ["StdlibBridgeHandler", "attach_stdlib"]
