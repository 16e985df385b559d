"""Composition helpers turning backend configurations into live backends.

Purpose
-------
Map each configuration type onto the adapter that implements it and build the
whole set fail-fast: either every backend opens, or none stays open.

Contents
--------
* :class:`Collaborators` - injectable clock, console and syslog transport.
* :func:`build_backend` / :func:`build_backends` - registry-driven factories.

System Role
-----------
Keeps adapter selection out of :class:`lib_log_levels.runtime.Logger`; the set
of backend kinds is closed and listed in ``_BACKEND_FACTORIES``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from rich.console import Console

from lib_log_levels.adapters.file import FileBackend
from lib_log_levels.adapters.syslog import SyslogBackend, SyslogTransport
from lib_log_levels.application.ports.backend import BackendPort
from lib_log_levels.application.ports.time import ClockPort
from lib_log_levels.domain.configs import FileConfig, SyslogConfig
from lib_log_levels.domain.errors import UnsupportedBackendError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collaborators:
    """Optional overrides handed to every backend factory."""

    clock: ClockPort | None = None
    console: Console | None = None
    syslog_transport: SyslogTransport | None = None


def _build_file(config: FileConfig, collaborators: Collaborators) -> BackendPort:
    return FileBackend(config, clock=collaborators.clock, console=collaborators.console)


def _build_syslog(config: SyslogConfig, collaborators: Collaborators) -> BackendPort:
    return SyslogBackend(config, transport=collaborators.syslog_transport)


_BACKEND_FACTORIES: Mapping[type, Callable[[Any, Collaborators], BackendPort]] = {
    FileConfig: _build_file,
    SyslogConfig: _build_syslog,
}


def build_backend(config: Any, collaborators: Collaborators) -> BackendPort:
    """Return the backend described by ``config``.

    Raises
    ------
    UnsupportedBackendError
        When ``config`` is not one of the known configuration types.
    """

    for config_type, factory in _BACKEND_FACTORIES.items():
        if isinstance(config, config_type):
            return factory(config, collaborators)
    raise UnsupportedBackendError(config)


def build_backends(configs: Iterable[Any], collaborators: Collaborators) -> list[BackendPort]:
    """Build one backend per configuration, closing earlier ones on failure."""

    built: list[BackendPort] = []
    try:
        for config in configs:
            built.append(build_backend(config, collaborators))
    except Exception:
        for backend in reversed(built):
            try:
                backend.close()
            except Exception as exc:  # noqa: BLE001
                LOGGER.debug("Closing %s after a failed construction raised", type(backend).__name__, exc_info=exc)
        raise
    return built


__all__ = ["Collaborators", "build_backend", "build_backends"]
