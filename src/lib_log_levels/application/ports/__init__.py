"""Protocols the application layer depends on."""

from __future__ import annotations

from .backend import BackendPort
from .time import ClockPort

__all__ = ["BackendPort", "ClockPort"]
