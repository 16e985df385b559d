"""Backend configuration value objects.

Purpose
-------
Describe, as plain frozen data, which backend a logger should build and how
that backend filters messages. Validation happens when the backend is built,
so configs stay cheap to create from environment variables or tests.

Contents
--------
* :data:`CONSOLE_PATH` – sentinel path selecting standard error.
* :class:`FileConfig` – file or console backend settings.
* :class:`SyslogConfig` – system-log backend settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Union

from .levels import DEFAULT_LEVEL

CONSOLE_PATH = "-"


@dataclass(slots=True, frozen=True)
class FileConfig:
    """Settings for :class:`~lib_log_levels.adapters.file.FileBackend`.

    Attributes
    ----------
    path:
        Target log file. Empty or :data:`CONSOLE_PATH` selects standard error.
    level:
        Threshold name (``"error"`` … ``"debug"``).
    force_color:
        Colourise console labels even when standard error is not a terminal.
    no_color:
        Never colourise console labels.
    """

    path: Union[str, "os.PathLike[str]"] = ""
    level: str = DEFAULT_LEVEL
    force_color: bool = False
    no_color: bool = False

    @property
    def uses_console(self) -> bool:
        """Return ``True`` when output goes to standard error.

        Examples
        --------
        >>> FileConfig().uses_console, FileConfig(path="-").uses_console
        (True, True)
        >>> FileConfig(path="/var/log/app.log").uses_console
        False
        """

        return os.fspath(self.path) in ("", CONSOLE_PATH)

    def replace(self, **changes: Any) -> "FileConfig":
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)


@dataclass(slots=True, frozen=True)
class SyslogConfig:
    """Settings for :class:`~lib_log_levels.adapters.syslog.SyslogBackend`.

    Attributes
    ----------
    tag:
        Identifier prepended by syslog to each message; empty uses the
        program name.
    facility:
        Facility name such as ``"user"``, ``"daemon"`` or ``"local0"``.
    level:
        Threshold name (``"error"`` … ``"debug"``).
    """

    tag: str = ""
    facility: str = "user"
    level: str = DEFAULT_LEVEL

    def replace(self, **changes: Any) -> "SyslogConfig":
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)


BackendConfig = Union[FileConfig, SyslogConfig]


__all__ = ["BackendConfig", "CONSOLE_PATH", "FileConfig", "SyslogConfig"]
