from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from rich.console import Console

from lib_log_levels.adapters.file import FileBackend
from lib_log_levels.domain.configs import FileConfig
from lib_log_levels.domain.errors import InvalidLevelError
from lib_log_levels.domain.levels import LogLevel
from tests.os_markers import OS_AGNOSTIC, POSIX_ONLY

pytestmark = [OS_AGNOSTIC]


def test_file_backend_creates_parent_directories(tmp_path: Path, fixed_clock) -> None:
    target = tmp_path / "nested" / "deeper" / "app.log"

    backend = FileBackend(FileConfig(path=str(target)), clock=fixed_clock)
    backend.write(LogLevel.INFO, "", "started")
    backend.close()

    assert target.read_text(encoding="utf-8") == "2025/09/30 12:00:00.123456 INFO: started\n"


def test_file_backend_appends_to_existing_file(tmp_path: Path, fixed_clock) -> None:
    target = tmp_path / "app.log"
    target.write_text("previous line\n", encoding="utf-8")

    backend = FileBackend(FileConfig(path=target), clock=fixed_clock)
    backend.write(LogLevel.WARNING, "db", "slow")
    backend.close()

    assert target.read_text(encoding="utf-8").splitlines() == [
        "previous line",
        "2025/09/30 12:00:00.123456 WARNING: db: slow",
    ]


def test_file_backend_never_colorizes(tmp_path: Path) -> None:
    backend = FileBackend(FileConfig(path=tmp_path / "app.log", force_color=True))
    backend.write(LogLevel.ERROR, "", "plain")
    backend.close()

    assert backend.colorize is False
    assert "\x1b[" not in (tmp_path / "app.log").read_text(encoding="utf-8")


@POSIX_ONLY
def test_file_backend_creates_file_with_0644(tmp_path: Path) -> None:
    target = tmp_path / "perm.log"
    previous = os.umask(0o022)
    try:
        FileBackend(FileConfig(path=target)).close()
    finally:
        os.umask(previous)

    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_file_backend_open_failure_is_raised(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        FileBackend(FileConfig(path=blocker / "app.log"))


def test_file_backend_rejects_invalid_level(tmp_path: Path) -> None:
    with pytest.raises(InvalidLevelError):
        FileBackend(FileConfig(path=tmp_path / "app.log", level="loud"))

    assert not (tmp_path / "app.log").exists()


def test_console_backend_plain_label_has_colon(record_console: Console, fixed_clock) -> None:
    backend = FileBackend(FileConfig(path="-"), clock=fixed_clock, console=record_console)
    backend.write(LogLevel.NOTICE, "worker", "ready")

    assert backend.colorize is False
    assert record_console.export_text() == "2025/09/30 12:00:00.123456 NOTICE: worker: ready\n"


def test_console_backend_colorizes_label_without_colon(color_console: Console, fixed_clock) -> None:
    backend = FileBackend(FileConfig(), clock=fixed_clock, console=color_console)
    backend.write(LogLevel.INFO, "", "hello")

    output = color_console.file.getvalue()
    assert backend.colorize is True
    assert "\x1b[34mINFO\x1b[0m" in output
    assert "INFO:" not in output
    assert output.endswith(" hello\n")


def test_console_backend_respects_no_color(color_console: Console, fixed_clock) -> None:
    backend = FileBackend(FileConfig(no_color=True), clock=fixed_clock, console=color_console)
    backend.write(LogLevel.INFO, "", "hello")

    assert backend.colorize is False
    assert "INFO: hello" in color_console.file.getvalue()


def test_console_backend_writes_to_stderr(capsys: pytest.CaptureFixture[str], fixed_clock) -> None:
    backend = FileBackend(FileConfig(), clock=fixed_clock)
    backend.write(LogLevel.DEBUG, "", "to stderr")
    backend.close()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "2025/09/30 12:00:00.123456 DEBUG: to stderr\n"


def test_console_close_is_idempotent_and_keeps_stderr_open(fixed_clock) -> None:
    backend = FileBackend(FileConfig(path="-"), clock=fixed_clock)
    backend.close()
    backend.close()

    import sys

    assert not sys.stderr.closed


def test_messages_with_markup_characters_are_printed_verbatim(record_console: Console, fixed_clock) -> None:
    backend = FileBackend(FileConfig(), clock=fixed_clock, console=record_console)
    backend.write(LogLevel.INFO, "", "[bold]not markup[/bold] :smile:")

    assert "[bold]not markup[/bold] :smile:" in record_console.export_text()
