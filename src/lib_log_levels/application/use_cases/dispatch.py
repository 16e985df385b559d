"""Use case fanning a single leveled message out to every backend.

Purpose
-------
Filter a message against each backend's threshold, hand the surviving writes
to the backends in parallel, and wait for all of them before returning.

Contents
--------
* :class:`BackendSet` – backends plus the lock, worker pool and failure
  counter shared by a logger and the loggers derived from it.
* :func:`create_dispatcher` – factory returning the callable invoked for each
  log call.
* :func:`build_diagnostic_emitter` – guard around the optional diagnostic hook.

System Role
-----------
Application-layer orchestrator used by :mod:`lib_log_levels.runtime`. The
threshold check lives here so it runs exactly once per backend and call.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from lib_log_levels.application.ports.backend import BackendPort
from lib_log_levels.domain.levels import LogLevel

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]
DispatchResult = dict[str, Any]
DispatchCallable = Callable[[LogLevel, str, str], DispatchResult]


class BackendSet:
    """Backends owned by one logger family.

    A logger and every logger returned by ``with_context`` share the same
    instance, so the dispatch lock and the failure counter are common to all
    of them.

    Examples
    --------
    >>> backends = BackendSet([])
    >>> len(backends), backends.closed
    (0, False)
    """

    def __init__(self, backends: Sequence[BackendPort]) -> None:
        self.backends: tuple[BackendPort, ...] = tuple(backends)
        self.lock = threading.Lock()
        self.closed = False
        self.write_failures = 0
        self._thread_state = threading.local()
        self._executor: ThreadPoolExecutor | None = None
        if len(self.backends) > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=len(self.backends),
                thread_name_prefix="lib_log_levels",
            )

    def __len__(self) -> int:
        return len(self.backends)

    @property
    def dispatching(self) -> bool:
        """Return ``True`` while the current thread runs a backend write."""

        return getattr(self._thread_state, "dispatching", False)

    @dispatching.setter
    def dispatching(self, value: bool) -> None:
        self._thread_state.dispatching = value

    @property
    def reporting(self) -> bool:
        """Return ``True`` while the current thread reports write failures."""

        return getattr(self._thread_state, "reporting", False)

    @reporting.setter
    def reporting(self, value: bool) -> None:
        self._thread_state.reporting = value

    @property
    def executor(self) -> ThreadPoolExecutor | None:
        """Worker pool used for parallel writes; ``None`` with fewer than two backends."""

        return self._executor

    def stop_workers(self) -> None:
        """Shut the worker pool down after pending writes finish."""

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Return an emitter that forwards to ``diagnostic`` and never raises.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append((name, payload)))
    >>> emit("write_failed", {"backend": "FileBackend"})
    >>> seen
    [('write_failed', {'backend': 'FileBackend'})]
    >>> build_diagnostic_emitter(None)("write_failed", {})
    """

    def emit(name: str, payload: dict[str, Any]) -> None:
        if diagnostic is None:
            return
        try:
            diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)

    return emit


def create_dispatcher(backends: BackendSet, *, diagnostic: DiagnosticHook = None) -> DispatchCallable:
    """Build the callable that writes one message to every permitted backend.

    Parameters
    ----------
    backends:
        Shared :class:`BackendSet` of the logger family.
    diagnostic:
        Optional hook invoked as ``diagnostic("write_failed", payload)`` when a
        backend raises while writing.

    Returns
    -------
    Callable[[LogLevel, str, str], dict[str, Any]]
        Function accepting ``level``, ``context`` and the formatted
        ``message``. It returns once every permitted backend finished its
        write attempt, with a result mapping ``ok``, ``delivered``, ``failed``
        and ``skipped`` counts. Calls after close, and calls made from inside
        a backend write on the same thread, are dropped with ``ok`` false and
        a ``reason`` of ``"closed"`` or ``"reentrant"``. Write failures are
        counted under the lock and reported after it is released.

    Examples
    --------
    >>> class ListBackend:
    ...     def __init__(self, threshold):
    ...         self.threshold = threshold
    ...         self.lines = []
    ...     def write(self, level, context, message):
    ...         self.lines.append((level.label, context, message))
    ...     def close(self):
    ...         pass
    >>> chatty, quiet = ListBackend(LogLevel.DEBUG), ListBackend(LogLevel.ERROR)
    >>> dispatch = create_dispatcher(BackendSet([chatty, quiet]))
    >>> dispatch(LogLevel.INFO, "db", "connected")
    {'ok': True, 'delivered': 1, 'failed': 0, 'skipped': 1}
    >>> chatty.lines, quiet.lines
    ([('INFO', 'db', 'connected')], [])
    """

    emit = build_diagnostic_emitter(diagnostic)

    def dispatch(level: LogLevel, context: str, message: str) -> DispatchResult:
        targets = [backend for backend in backends.backends if backend.threshold.permits(level)]
        skipped = len(backends) - len(targets)
        if backends.closed:
            return _dropped("closed", skipped=skipped)
        if not targets:
            return _result(delivered=0, failed=0, skipped=skipped)
        if backends.dispatching:
            # A backend write logged back into this logger from its own thread.
            return _dropped("reentrant", skipped=skipped)

        with backends.lock:
            if backends.closed:
                return _dropped("closed", skipped=skipped)
            errors = _fan_out(backends, targets, level, context, message)
            backends.write_failures += len(errors)

        if errors and not backends.reporting:
            backends.reporting = True
            try:
                for backend, error in errors:
                    _report_write_failure(emit, backend, level, error)
            finally:
                backends.reporting = False

        return _result(delivered=len(targets) - len(errors), failed=len(errors), skipped=skipped)

    return dispatch


def _fan_out(
    backends: BackendSet,
    targets: Sequence[BackendPort],
    level: LogLevel,
    context: str,
    message: str,
) -> list[tuple[BackendPort, Exception]]:
    executor = backends.executor
    if len(targets) == 1 or executor is None:
        outcomes = [_attempt_write(backends, backend, level, context, message) for backend in targets]
    else:
        futures = [executor.submit(_attempt_write, backends, backend, level, context, message) for backend in targets]
        outcomes = [future.result() for future in futures]
    return [(backend, error) for backend, error in zip(targets, outcomes) if error is not None]


def _attempt_write(
    backends: BackendSet,
    backend: BackendPort,
    level: LogLevel,
    context: str,
    message: str,
) -> Exception | None:
    backends.dispatching = True
    try:
        backend.write(level, context, message)
    except Exception as exc:  # noqa: BLE001
        return exc
    finally:
        backends.dispatching = False
    return None


def _report_write_failure(
    emit: Callable[[str, dict[str, Any]], None],
    backend: BackendPort,
    level: LogLevel,
    error: Exception,
) -> None:
    LOGGER.debug("Backend %s failed to write a %s message", type(backend).__name__, level.label, exc_info=error)
    emit(
        "write_failed",
        {"backend": type(backend).__name__, "level": level.severity, "exception": repr(error)},
    )


def _dropped(reason: str, *, skipped: int) -> DispatchResult:
    return {"ok": False, "reason": reason, "delivered": 0, "failed": 0, "skipped": skipped}


def _result(*, delivered: int, failed: int, skipped: int) -> DispatchResult:
    return {"ok": failed == 0, "delivered": delivered, "failed": failed, "skipped": skipped}


__all__ = [
    "BackendSet",
    "DiagnosticHook",
    "DispatchCallable",
    "DispatchResult",
    "build_diagnostic_emitter",
    "create_dispatcher",
]
