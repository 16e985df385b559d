from __future__ import annotations

from datetime import datetime
from io import StringIO

import pytest
from rich.console import Console


class FixedClock:
    """Clock returning the same local timestamp for every call."""

    def __init__(self, moment: datetime | None = None) -> None:
        self.moment = moment or datetime(2025, 9, 30, 12, 0, 0, 123456)

    def now(self) -> datetime:
        return self.moment


class RecordingTransport:
    """Syslog transport collecting calls instead of talking to syslog."""

    def __init__(self) -> None:
        self.opened: list[tuple[str, int]] = []
        self.sent: list[tuple[int, str]] = []
        self.closed = 0

    def open(self, ident: str, facility: int) -> None:
        self.opened.append((ident, facility))

    def send(self, priority: int, message: str) -> None:
        self.sent.append((priority, message))

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, color_system=None, width=200)


@pytest.fixture
def color_console() -> Console:
    return Console(file=StringIO(), force_terminal=True, color_system="standard", width=200)


@pytest.fixture
def syslog_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture(autouse=True)
def _clear_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep colour decisions independent of the developer's shell."""

    for name in ("NO_COLOR", "FORCE_COLOR", "TERM", "LOG_FORCE_COLOR", "LOG_NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
