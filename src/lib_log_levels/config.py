"""Environment-driven configuration with optional ``.env`` loading.

Purpose
-------
Let deployments choose backends through ``LOG_*`` environment variables
instead of code, optionally seeded from the nearest ``.env`` file.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle read by :func:`should_use_dotenv`.
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.
* :func:`configs_from_env` / :func:`logger_from_env` - build backends from
  the environment.

Recognised variables
--------------------
``LOG_FILE_PATH``, ``LOG_FILE_LEVEL``, ``LOG_FORCE_COLOR``, ``LOG_NO_COLOR``,
``LOG_SYSLOG_TAG``, ``LOG_SYSLOG_FACILITY``, ``LOG_SYSLOG_LEVEL``.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_levels.domain.configs import BackendConfig, FileConfig, SyslogConfig
from lib_log_levels.domain.levels import DEFAULT_LEVEL

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}
_FILE_VARS = ("LOG_FILE_PATH", "LOG_FILE_LEVEL")
_SYSLOG_VARS = ("LOG_SYSLOG_TAG", "LOG_SYSLOG_FACILITY", "LOG_SYSLOG_LEVEL")

_DOTENV_LOCK = threading.Lock()
_DOTENV_LOADED = False
_DOTENV_PATH: Path | None = None


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is wanted.

    An explicit flag wins; otherwise the value of :data:`DOTENV_ENV_VAR`
    decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    return _is_truthy(env_value)


def enable_dotenv(search_from: str | Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    The search walks upwards from ``search_from`` (default: the current
    working directory). Only the first call per process reads the file.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_LOADED, _DOTENV_PATH
    with _DOTENV_LOCK:
        if _DOTENV_LOADED:
            return _DOTENV_PATH
        found = _find_dotenv(search_from)
        if found is not None:
            load_dotenv(found, override=False)
        _DOTENV_PATH = found
        _DOTENV_LOADED = True
        return found


def _find_dotenv(search_from: str | Path | None) -> Path | None:
    if search_from is None:
        candidate = find_dotenv(usecwd=True)
        return Path(candidate).resolve() if candidate else None
    start = Path(search_from).resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_PATH
    with _DOTENV_LOCK:
        _DOTENV_LOADED = False
        _DOTENV_PATH = None


def configs_from_env(environ: Mapping[str, str] | None = None) -> list[BackendConfig]:
    """Return backend configurations described by ``LOG_*`` variables.

    A :class:`FileConfig` is produced when any file variable is set, a
    :class:`SyslogConfig` when any syslog variable is set. With neither, a
    console :class:`FileConfig` at :data:`DEFAULT_LEVEL` is returned so a
    bare environment still logs somewhere.

    Examples
    --------
    >>> configs_from_env({"LOG_FILE_LEVEL": "debug", "LOG_NO_COLOR": "1"})
    [FileConfig(path='', level='debug', force_color=False, no_color=True)]
    >>> configs_from_env({"LOG_SYSLOG_TAG": "svc"})
    [SyslogConfig(tag='svc', facility='user', level='info')]
    """

    env = os.environ if environ is None else environ
    configs: list[BackendConfig] = []
    force_color = _is_truthy(env.get("LOG_FORCE_COLOR"))
    no_color = _is_truthy(env.get("LOG_NO_COLOR"))

    if any(name in env for name in _FILE_VARS):
        configs.append(
            FileConfig(
                path=env.get("LOG_FILE_PATH", ""),
                level=env.get("LOG_FILE_LEVEL", DEFAULT_LEVEL),
                force_color=force_color,
                no_color=no_color,
            )
        )
    if any(name in env for name in _SYSLOG_VARS):
        configs.append(
            SyslogConfig(
                tag=env.get("LOG_SYSLOG_TAG", ""),
                facility=env.get("LOG_SYSLOG_FACILITY", "user"),
                level=env.get("LOG_SYSLOG_LEVEL", DEFAULT_LEVEL),
            )
        )
    if not configs:
        configs.append(FileConfig(force_color=force_color, no_color=no_color))
    return configs


def logger_from_env(*, use_dotenv: bool | None = None, **overrides: Any):
    """Build a :class:`~lib_log_levels.runtime.Logger` from the environment.

    ``use_dotenv`` follows :func:`should_use_dotenv`; ``overrides`` are passed
    to :func:`~lib_log_levels.runtime.new_logger` (``clock``, ``console``,
    ``syslog_transport``, ``diagnostic``).
    """

    from lib_log_levels.runtime import new_logger

    if should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(DOTENV_ENV_VAR)):
        enable_dotenv()
    return new_logger(*configs_from_env(), **overrides)


__all__ = [
    "DOTENV_ENV_VAR",
    "configs_from_env",
    "enable_dotenv",
    "logger_from_env",
    "should_use_dotenv",
]
