"""Adapters implementing the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .file import FileBackend
from .stdlib_bridge import StdlibBridgeHandler, attach_stdlib
from .syslog import StdlibSyslogTransport, SyslogBackend, SyslogTransport

__all__ = [
    "FileBackend",
    "StdlibBridgeHandler",
    "StdlibSyslogTransport",
    "SyslogBackend",
    "SyslogTransport",
    "SystemClock",
    "attach_stdlib",
]
