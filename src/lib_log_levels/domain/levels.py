"""Level table mapping severity names onto an ordered enum.

Purpose
-------
Offer the five severities understood by every backend and the single lookup
used to turn configuration strings into levels.

Contents
--------
* :class:`LogLevel` enum with lookup helpers and presentation metadata.
* ``_COLOR_TABLE`` / ``_SYSLOG_PRIORITY_TABLE`` constants.

System Role
-----------
Shared by the dispatcher (threshold checks), the file backend (labels and
colours) and the syslog backend (priority mapping).
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import InvalidLevelError

DEFAULT_LEVEL = "info"
"""Level name applied when a configuration does not specify one."""


class LogLevel(Enum):
    """Severities ordered from most (``ERROR``) to least (``DEBUG``) severe."""

    ERROR = 1
    WARNING = 2
    NOTICE = 3
    INFO = 4
    DEBUG = 5

    @property
    def severity(self) -> str:
        """Return the lowercase name accepted by :meth:`from_name`."""

        return self.name.lower()

    @property
    def label(self) -> str:
        """Return the upper-case label printed in front of messages."""

        return self.name

    @property
    def color(self) -> str:
        """Return the rich colour name used for console labels."""

        return _COLOR_TABLE[self]

    @property
    def syslog_priority(self) -> int:
        """Return the syslog priority number matching this level."""

        return _SYSLOG_PRIORITY_TABLE[self]

    def permits(self, level: "LogLevel") -> bool:
        """Return ``True`` when a threshold of ``self`` lets ``level`` through.

        Examples
        --------
        >>> LogLevel.WARNING.permits(LogLevel.ERROR)
        True
        >>> LogLevel.WARNING.permits(LogLevel.NOTICE)
        False
        """

        return level.value <= self.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Return the level called ``name`` (case-sensitive).

        Examples
        --------
        >>> LogLevel.from_name("notice")
        <LogLevel.NOTICE: 3>
        >>> LogLevel.from_name("INFO")
        Traceback (most recent call last):
        ...
        lib_log_levels.domain.errors.InvalidLevelError: invalid logging level: 'INFO'
        """

        if isinstance(name, str):
            level = _NAME_TABLE.get(name)
            if level is not None:
                return level
        raise InvalidLevelError(name)

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib :mod:`logging` level number into :class:`LogLevel`."""

        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level > logging.INFO:
            return cls.NOTICE
        if level > logging.DEBUG:
            return cls.INFO
        return cls.DEBUG


_NAME_TABLE = {level.severity: level for level in LogLevel}

_COLOR_TABLE = {
    LogLevel.ERROR: "red",
    LogLevel.WARNING: "yellow",
    LogLevel.NOTICE: "magenta",
    LogLevel.INFO: "blue",
    LogLevel.DEBUG: "cyan",
}
# Console label colours rendered by the file backend.

_SYSLOG_PRIORITY_TABLE = {
    LogLevel.ERROR: 3,
    LogLevel.WARNING: 4,
    LogLevel.NOTICE: 5,
    LogLevel.INFO: 6,
    LogLevel.DEBUG: 7,
}


def coerce_level(level: "LogLevel | str") -> LogLevel:
    """Return ``level`` as :class:`LogLevel`, looking strings up by name."""

    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


__all__ = ["DEFAULT_LEVEL", "LogLevel", "coerce_level"]
