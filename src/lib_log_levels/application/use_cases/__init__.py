"""Use cases wiring backends into dispatch and shutdown callables."""

from __future__ import annotations

from .dispatch import BackendSet, DiagnosticHook, DispatchResult, build_diagnostic_emitter, create_dispatcher
from .shutdown import create_shutdown

__all__ = [
    "BackendSet",
    "DiagnosticHook",
    "DispatchResult",
    "build_diagnostic_emitter",
    "create_dispatcher",
    "create_shutdown",
]
