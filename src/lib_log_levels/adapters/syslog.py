"""System-log backend implementing :class:`BackendPort`.

Purpose
-------
Forward leveled messages to the platform syslog facility at the priority
mapped from the level table.

Contents
--------
* :data:`FACILITIES` - facility names accepted in :class:`SyslogConfig`.
* :class:`SyslogTransport` - protocol for the underlying syslog connection.
* :class:`SyslogBackend` - concrete backend.

System Role
-----------
Messages carry the context prefix but no timestamp or label; syslog records
both itself. The stdlib :mod:`syslog` connection is process-wide, so the most
recently opened backend decides the tag and default facility, and the
connection stays open until the last backend using it closes.
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from lib_log_levels.application.ports.backend import BackendPort
from lib_log_levels.domain.configs import SyslogConfig
from lib_log_levels.domain.levels import LogLevel

FACILITIES: dict[str, int] = {
    "kern": 0 << 3,
    "user": 1 << 3,
    "mail": 2 << 3,
    "daemon": 3 << 3,
    "auth": 4 << 3,
    "syslog": 5 << 3,
    "lpr": 6 << 3,
    "news": 7 << 3,
    "uucp": 8 << 3,
    "cron": 9 << 3,
    **{f"local{index}": (16 + index) << 3 for index in range(8)},
}
#: Facility codes as defined by RFC 5424, keyed by their conventional names.


@runtime_checkable
class SyslogTransport(Protocol):
    """Connection to a system logger."""

    def open(self, ident: str, facility: int) -> None: ...

    def send(self, priority: int, message: str) -> None: ...

    def close(self) -> None: ...


_OPEN_LOCK = threading.Lock()
_OPEN_TRANSPORTS = 0
# Number of StdlibSyslogTransport instances currently holding the connection.


class StdlibSyslogTransport(SyslogTransport):
    """Transport backed by the stdlib :mod:`syslog` module (POSIX only).

    Open transports are reference-counted: ``closelog`` runs only when the
    last one closes, so closing one backend leaves the others connected.
    """

    def __init__(self) -> None:
        try:
            import syslog
        except ImportError as exc:  # pragma: no cover - executed only on Windows
            raise RuntimeError("syslog is not available on this platform") from exc
        self._syslog = syslog
        self._opened = False

    def open(self, ident: str, facility: int) -> None:
        global _OPEN_TRANSPORTS
        with _OPEN_LOCK:
            if ident:
                self._syslog.openlog(ident, self._syslog.LOG_PID, facility)
            else:
                self._syslog.openlog(logoption=self._syslog.LOG_PID, facility=facility)
            if not self._opened:
                self._opened = True
                _OPEN_TRANSPORTS += 1

    def send(self, priority: int, message: str) -> None:
        self._syslog.syslog(priority, message)

    def close(self) -> None:
        global _OPEN_TRANSPORTS
        with _OPEN_LOCK:
            if not self._opened:
                return
            self._opened = False
            _OPEN_TRANSPORTS -= 1
            if _OPEN_TRANSPORTS == 0:
                self._syslog.closelog()


def resolve_facility(name: str) -> int:
    """Return the numeric code of facility ``name``.

    Examples
    --------
    >>> resolve_facility("local3")
    152
    >>> resolve_facility("printer")
    Traceback (most recent call last):
    ...
    ValueError: Unknown syslog facility: 'printer'
    """

    try:
        return FACILITIES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown syslog facility: {name!r}") from exc


class SyslogBackend(BackendPort):
    """Send messages to syslog through a :class:`SyslogTransport`.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def open(self, ident, facility):
    ...         self.calls.append(("open", ident, facility))
    ...     def send(self, priority, message):
    ...         self.calls.append(("send", priority, message))
    ...     def close(self):
    ...         self.calls.append(("close",))
    >>> transport = Recorder()
    >>> backend = SyslogBackend(SyslogConfig(tag="svc", facility="daemon"), transport=transport)
    >>> backend.write(LogLevel.WARNING, "db", "slow query")
    >>> backend.close()
    >>> transport.calls
    [('open', 'svc', 24), ('send', 4, 'db: slow query'), ('close',)]
    """

    def __init__(self, config: SyslogConfig, *, transport: SyslogTransport | None = None) -> None:
        """Validate ``config`` and open the syslog connection.

        Raises
        ------
        InvalidLevelError
            When ``config.level`` is not a known level name.
        ValueError
            When ``config.facility`` is not a known facility.
        RuntimeError
            When no transport is supplied and the platform lacks syslog.
        """
        self._threshold = LogLevel.from_name(config.level)
        facility = resolve_facility(config.facility)
        self._transport = transport or StdlibSyslogTransport()
        self._lock = threading.Lock()
        self._closed = False
        self._transport.open(config.tag, facility)

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    def write(self, level: LogLevel, context: str, message: str) -> None:
        body = f"{context}: {message}" if context else message
        with self._lock:
            self._transport.send(level.syslog_priority, body)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._transport.close()


__all__ = ["FACILITIES", "StdlibSyslogTransport", "SyslogBackend", "SyslogTransport", "resolve_facility"]
