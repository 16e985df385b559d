"""Backend port describing the capability every output destination offers.

Purpose
-------
Define the narrow contract the dispatcher depends on so file, console and
syslog adapters plug in without leaking their I/O details upstream.

Contents
--------
* :class:`BackendPort` – runtime-checkable protocol with ``threshold``,
  ``write`` and ``close``.

System Role
-----------
The threshold is read by the dispatcher, which filters each message exactly
once before calling :meth:`BackendPort.write`; implementations do not repeat
the check.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_levels.domain.levels import LogLevel


@runtime_checkable
class BackendPort(Protocol):
    """Accept leveled writes and release the output on close."""

    @property
    def threshold(self) -> LogLevel:
        """Least severe level the backend emits."""

    def write(self, level: LogLevel, context: str, message: str) -> None:
        """Format ``LABEL [context:] message`` and append it to the output."""

    def close(self) -> None:
        """Release the output resource; safe to call more than once."""


__all__ = ["BackendPort"]
