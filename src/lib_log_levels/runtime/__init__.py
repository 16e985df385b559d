"""Runtime façade exposing :class:`Logger` and its constructor.

Purpose
-------
Give host programs a single object to pass around: construct it from backend
configurations, derive context-tagged variants from it, call its leveled
methods, and close it at shutdown. There is no process-wide logger; each
instance is independent.

Contents
--------
* :func:`new_logger` - composition root building the backends.
* :class:`Logger` - leveled methods, ``with_context``, ``close``.

System Role
-----------
Outer shell over the application use cases in
:mod:`lib_log_levels.application.use_cases` and the adapters selected by
:mod:`._composition`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from rich.console import Console

from lib_log_levels.adapters.syslog import SyslogTransport
from lib_log_levels.application.ports.time import ClockPort
from lib_log_levels.application.use_cases.dispatch import (
    BackendSet,
    DiagnosticHook,
    DispatchCallable,
    DispatchResult,
    create_dispatcher,
)
from lib_log_levels.application.use_cases.shutdown import create_shutdown
from lib_log_levels.domain.configs import BackendConfig
from lib_log_levels.domain.levels import LogLevel, coerce_level

from ._composition import Collaborators, build_backends


@dataclass(frozen=True)
class _Family:
    """State shared by a logger and every logger derived from it."""

    backends: BackendSet
    dispatch: DispatchCallable
    shutdown: Callable[[], None]


def _render_message(fmt: Any, args: tuple[Any, ...]) -> str:
    """Apply printf-style ``args`` to ``fmt`` without ever raising.

    Examples
    --------
    >>> _render_message("hello %s", ("world",))
    'hello world'
    >>> _render_message("100%", ())
    '100%'
    >>> _render_message("%(user)s logged in", ({"user": "ada"},))
    'ada logged in'
    >>> _render_message("%d items", ("many",))
    "%d items ('many',)"
    """

    text = str(fmt)
    if not args:
        return text
    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return text % values
    except (TypeError, ValueError, KeyError):
        return f"{text} {args!r}"


class Logger:
    """Leveled logger fanning each message out to its backends.

    Obtain instances through :func:`new_logger` (or
    :meth:`Logger.from_configs`); derive tagged variants with
    :meth:`with_context`. Leveled calls return the dispatch result mapping and
    never raise because of a backend fault.
    """

    def __init__(self, family: _Family, context: str = "") -> None:
        self._family = family
        self._context = context

    @classmethod
    def from_configs(
        cls,
        *configs: BackendConfig,
        clock: ClockPort | None = None,
        console: Console | None = None,
        syslog_transport: SyslogTransport | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> "Logger":
        """Build one backend per configuration and return a logger over them.

        Raises
        ------
        InvalidLevelError
            When a configuration names an unknown level.
        UnsupportedBackendError
            When a configuration type is not recognised.
        OSError
            When a log file or its directory cannot be opened or created.
        """

        collaborators = Collaborators(clock=clock, console=console, syslog_transport=syslog_transport)
        backends = BackendSet(build_backends(configs, collaborators))
        family = _Family(
            backends=backends,
            dispatch=create_dispatcher(backends, diagnostic=diagnostic),
            shutdown=create_shutdown(backends, diagnostic=diagnostic),
        )
        return cls(family)

    @property
    def context(self) -> str:
        """Return the context string prefixed to messages."""

        return self._context

    @property
    def closed(self) -> bool:
        return self._family.backends.closed

    @property
    def write_failures(self) -> int:
        """Return how many backend writes raised and were dropped."""

        return self._family.backends.write_failures

    def with_context(self, context: str) -> "Logger":
        """Return a logger sharing these backends but tagged with ``context``."""

        return Logger(self._family, context)

    def enabled_for(self, level: LogLevel | str) -> bool:
        """Return ``True`` when at least one backend emits ``level`` messages."""

        resolved = coerce_level(level)
        return any(backend.threshold.permits(resolved) for backend in self._family.backends.backends)

    def error(self, fmt: str, *args: Any) -> DispatchResult:
        """Emit an ``ERROR`` message."""
        return self._log(LogLevel.ERROR, fmt, args)

    def warning(self, fmt: str, *args: Any) -> DispatchResult:
        """Emit a ``WARNING`` message."""
        return self._log(LogLevel.WARNING, fmt, args)

    def notice(self, fmt: str, *args: Any) -> DispatchResult:
        """Emit a ``NOTICE`` message."""
        return self._log(LogLevel.NOTICE, fmt, args)

    def info(self, fmt: str, *args: Any) -> DispatchResult:
        """Emit an ``INFO`` message."""
        return self._log(LogLevel.INFO, fmt, args)

    def debug(self, fmt: str, *args: Any) -> DispatchResult:
        """Emit a ``DEBUG`` message."""
        return self._log(LogLevel.DEBUG, fmt, args)

    def log(self, level: LogLevel | str, fmt: str, *args: Any) -> DispatchResult:
        """Emit a message at ``level`` (a :class:`LogLevel` or level name).

        Raises
        ------
        InvalidLevelError
            When ``level`` is an unknown name.
        """
        return self._log(coerce_level(level), fmt, args)

    def _log(self, level: LogLevel, fmt: str, args: tuple[Any, ...]) -> DispatchResult:
        """Format the message and hand it to the dispatcher.

        Returns
        -------
        dict[str, Any]
            ``ok`` is ``False`` when a backend failed or the logger is closed;
            ``delivered``/``failed``/``skipped`` count backends.
        """

        return self._family.dispatch(level, self._context, _render_message(fmt, args))

    def close(self) -> None:
        """Close every backend; later calls on this logger family are dropped."""

        self._family.shutdown()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def new_logger(
    *configs: BackendConfig,
    clock: ClockPort | None = None,
    console: Console | None = None,
    syslog_transport: SyslogTransport | None = None,
    diagnostic: DiagnosticHook = None,
) -> Logger:
    """Construct a :class:`Logger` with one backend per configuration.

    Parameters
    ----------
    configs:
        :class:`~lib_log_levels.domain.configs.FileConfig` and
        :class:`~lib_log_levels.domain.configs.SyslogConfig` instances. None
        at all yields a logger without backends.
    clock, console, syslog_transport:
        Collaborator overrides, mainly for tests.
    diagnostic:
        Optional ``diagnostic(name, payload)`` hook told about swallowed
        write and close failures.

    Examples
    --------
    >>> from io import StringIO
    >>> from lib_log_levels.domain.configs import FileConfig
    >>> buffer = StringIO()
    >>> log = new_logger(FileConfig(level="warning"), console=Console(file=buffer, color_system=None))
    >>> log.debug("x")
    {'ok': True, 'delivered': 0, 'failed': 0, 'skipped': 1}
    >>> log.close()
    >>> buffer.getvalue()
    ''
    """

    return Logger.from_configs(
        *configs,
        clock=clock,
        console=console,
        syslog_transport=syslog_transport,
        diagnostic=diagnostic,
    )


__all__ = ["Logger", "new_logger"]
