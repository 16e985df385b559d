"""Shutdown orchestration for a logger family.

Purpose
-------
Close every backend in turn and stop the fan-out workers, once.
"""

from __future__ import annotations

import logging
from typing import Callable

from .dispatch import BackendSet, DiagnosticHook, build_diagnostic_emitter

LOGGER = logging.getLogger(__name__)


def create_shutdown(backends: BackendSet, *, diagnostic: DiagnosticHook = None) -> Callable[[], None]:
    """Return a callable performing the close sequence for ``backends``.

    The callable waits for an in-flight dispatch to finish, marks the set as
    closed, then closes each backend. A backend raising from ``close`` is
    reported and does not prevent the remaining backends from closing.
    Subsequent calls are no-ops.
    """

    emit = build_diagnostic_emitter(diagnostic)

    def shutdown() -> None:
        """Close all backends and release the worker pool."""
        with backends.lock:
            if backends.closed:
                return
            backends.closed = True
        for backend in backends.backends:
            try:
                backend.close()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Backend %s raised while closing; continuing", type(backend).__name__, exc_info=exc)
                emit("close_failed", {"backend": type(backend).__name__, "exception": repr(exc)})
        backends.stop_workers()

    return shutdown


__all__ = ["create_shutdown"]
