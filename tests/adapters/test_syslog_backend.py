from __future__ import annotations

import sys

import pytest

from lib_log_levels.adapters.syslog import FACILITIES, StdlibSyslogTransport, SyslogBackend, resolve_facility
from lib_log_levels.domain.configs import SyslogConfig
from lib_log_levels.domain.errors import InvalidLevelError
from lib_log_levels.domain.levels import LogLevel
from tests.os_markers import OS_AGNOSTIC, POSIX_ONLY

pytestmark = [OS_AGNOSTIC]


def test_syslog_backend_opens_with_tag_and_facility(syslog_transport) -> None:
    SyslogBackend(SyslogConfig(tag="svc", facility="local0"), transport=syslog_transport)

    assert syslog_transport.opened == [("svc", 16 << 3)]


@pytest.mark.parametrize(
    "level, priority",
    [
        (LogLevel.ERROR, 3),
        (LogLevel.WARNING, 4),
        (LogLevel.NOTICE, 5),
        (LogLevel.INFO, 6),
        (LogLevel.DEBUG, 7),
    ],
)
def test_syslog_backend_maps_levels_to_priorities(syslog_transport, level: LogLevel, priority: int) -> None:
    backend = SyslogBackend(SyslogConfig(level="debug"), transport=syslog_transport)
    backend.write(level, "", "msg")

    assert syslog_transport.sent == [(priority, "msg")]


def test_syslog_backend_prefixes_context_without_color(syslog_transport) -> None:
    backend = SyslogBackend(SyslogConfig(), transport=syslog_transport)
    backend.write(LogLevel.ERROR, "http", "upstream timeout")

    assert syslog_transport.sent == [(3, "http: upstream timeout")]
    assert "\x1b[" not in syslog_transport.sent[0][1]


def test_syslog_backend_close_is_idempotent(syslog_transport) -> None:
    backend = SyslogBackend(SyslogConfig(), transport=syslog_transport)
    backend.close()
    backend.close()

    assert syslog_transport.closed == 1


def test_syslog_backend_rejects_unknown_facility(syslog_transport) -> None:
    with pytest.raises(ValueError, match="Unknown syslog facility"):
        SyslogBackend(SyslogConfig(facility="printer"), transport=syslog_transport)

    assert syslog_transport.opened == []


def test_syslog_backend_rejects_invalid_level(syslog_transport) -> None:
    with pytest.raises(InvalidLevelError):
        SyslogBackend(SyslogConfig(level="Error"), transport=syslog_transport)


def test_facility_table_covers_local_facilities() -> None:
    assert [resolve_facility(f"local{index}") for index in range(8)] == list(range(128, 192, 8))
    assert FACILITIES["user"] == 8


@POSIX_ONLY
def test_stdlib_transport_uses_syslog_module(monkeypatch: pytest.MonkeyPatch) -> None:
    syslog = pytest.importorskip("syslog")
    calls: list[tuple] = []
    monkeypatch.setattr(syslog, "openlog", lambda *args, **kwargs: calls.append(("open", args, kwargs)))
    monkeypatch.setattr(syslog, "syslog", lambda *args: calls.append(("send", args)))
    monkeypatch.setattr(syslog, "closelog", lambda: calls.append(("close",)))

    backend = SyslogBackend(SyslogConfig(tag="svc", facility="daemon"), transport=StdlibSyslogTransport())
    backend.write(LogLevel.NOTICE, "", "hello")
    backend.close()

    assert calls == [
        ("open", ("svc", syslog.LOG_PID, 24), {}),
        ("send", (5, "hello")),
        ("close",),
    ]


@pytest.mark.skipif(not sys.platform.startswith("win"), reason="Windows lacks the syslog module")
def test_stdlib_transport_unavailable_on_windows() -> None:  # pragma: no cover - platform specific
    with pytest.raises(RuntimeError):
        StdlibSyslogTransport()


@POSIX_ONLY
def test_stdlib_transport_closes_connection_after_last_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    syslog = pytest.importorskip("syslog")
    closes: list[str] = []
    monkeypatch.setattr(syslog, "openlog", lambda *args, **kwargs: None)
    monkeypatch.setattr(syslog, "closelog", lambda: closes.append("close"))

    first = SyslogBackend(SyslogConfig(tag="one"), transport=StdlibSyslogTransport())
    second = SyslogBackend(SyslogConfig(tag="two"), transport=StdlibSyslogTransport())

    first.close()
    assert closes == []

    second.close()
    assert closes == ["close"]
