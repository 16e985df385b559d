"""File and console backend implementing :class:`BackendPort`.

Purpose
-------
Append timestamped, labelled lines either to a log file or to standard error.
Console output goes through Rich so level labels are colourised on capable
terminals; file output always uses plain labels with a colon suffix.

Contents
--------
* :data:`TIMESTAMP_FORMAT` - ``strftime`` pattern with microsecond precision.
* :class:`FileBackend` - backend built from a :class:`FileConfig`.

System Role
-----------
Default backend of the runtime; :func:`lib_log_levels.config.configs_from_env`
falls back to a console :class:`FileBackend` when nothing is configured.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import IO

from rich.console import Console
from rich.text import Text

from lib_log_levels.application.ports.backend import BackendPort
from lib_log_levels.application.ports.time import ClockPort
from lib_log_levels.domain.configs import FileConfig
from lib_log_levels.domain.levels import LogLevel

from .clock import SystemClock

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S.%f"

_DIR_MODE = 0o755
_FILE_MODE = 0o644


def _open_append(path: Path) -> IO[str]:
    """Create parent folders and open ``path`` for appending."""

    path.parent.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
    return open(path, "a", encoding="utf-8", opener=lambda name, flags: os.open(name, flags, _FILE_MODE))


class FileBackend(BackendPort):
    """Write leveled lines to a file or, without a path, to standard error.

    Examples
    --------
    >>> from datetime import datetime
    >>> from io import StringIO
    >>> class FixedClock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, 0, 250000)
    >>> buffer = StringIO()
    >>> backend = FileBackend(
    ...     FileConfig(level="info"),
    ...     clock=FixedClock(),
    ...     console=Console(file=buffer, color_system=None),
    ... )
    >>> backend.write(LogLevel.INFO, "db", "connected")
    >>> buffer.getvalue()
    '2025/09/30 12:00:00.250000 INFO: db: connected\\n'
    """

    def __init__(
        self,
        config: FileConfig,
        *,
        clock: ClockPort | None = None,
        console: Console | None = None,
    ) -> None:
        """Resolve the threshold and open the output described by ``config``.

        Raises
        ------
        InvalidLevelError
            When ``config.level`` is not a known level name.
        OSError
            When the parent directory cannot be created or the file opened.
        """
        self._threshold = LogLevel.from_name(config.level)
        self._clock: ClockPort = clock or SystemClock()
        self._lock = threading.Lock()
        self._closed = False
        self._stream: IO[str] | None = None
        self._console: Console | None = None
        self._colorize = False

        if config.uses_console:
            self._console = console or Console(
                stderr=True,
                force_terminal=True if config.force_color else None,
                no_color=config.no_color,
                highlight=False,
                markup=False,
                emoji=False,
                soft_wrap=True,
            )
            self._colorize = not config.no_color and not self._console.no_color and self._console.color_system is not None
        else:
            self._stream = _open_append(Path(config.path))

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @property
    def colorize(self) -> bool:
        """Return ``True`` when labels are rendered in colour."""

        return self._colorize

    def write(self, level: LogLevel, context: str, message: str) -> None:
        """Append one line for ``message``; the caller already applied the threshold."""
        timestamp = self._clock.now().strftime(TIMESTAMP_FORMAT)
        body = f"{context}: {message}" if context else message
        with self._lock:
            if self._stream is not None:
                self._stream.write(f"{timestamp} {level.label}: {body}\n")
                self._stream.flush()
            elif self._console is not None:
                self._console.print(self._render(timestamp, level, body), soft_wrap=True)

    def _render(self, timestamp: str, level: LogLevel, body: str) -> Text:
        if self._colorize:
            return Text.assemble(f"{timestamp} ", (level.label, level.color), f" {body}")
        return Text(f"{timestamp} {level.label}: {body}")

    def close(self) -> None:
        """Close the log file; standard error is left open."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._stream is not None:
                self._stream.close()


__all__ = ["FileBackend", "TIMESTAMP_FORMAT"]
