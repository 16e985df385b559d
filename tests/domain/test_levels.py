from __future__ import annotations

import logging

import pytest

from lib_log_levels.domain.errors import InvalidLevelError
from lib_log_levels.domain.levels import LogLevel, coerce_level


@pytest.mark.parametrize(
    "name, expected",
    [
        ("error", LogLevel.ERROR),
        ("warning", LogLevel.WARNING),
        ("notice", LogLevel.NOTICE),
        ("info", LogLevel.INFO),
        ("debug", LogLevel.DEBUG),
    ],
)
def test_from_name_maps_every_level(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


@pytest.mark.parametrize("name", ["INFO", "Debug", " info", "verbose", "", "critical"])
def test_from_name_is_case_sensitive_and_closed(name: str) -> None:
    with pytest.raises(InvalidLevelError, match="invalid logging level"):
        LogLevel.from_name(name)


def test_from_name_rejects_non_strings() -> None:
    with pytest.raises(InvalidLevelError):
        LogLevel.from_name(4)  # type: ignore[arg-type]


def test_invalid_level_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        LogLevel.from_name("loud")


def test_levels_grow_with_decreasing_severity() -> None:
    values = [level.value for level in (LogLevel.ERROR, LogLevel.WARNING, LogLevel.NOTICE, LogLevel.INFO, LogLevel.DEBUG)]
    assert values == sorted(values)


@pytest.mark.parametrize("threshold", list(LogLevel))
@pytest.mark.parametrize("level", list(LogLevel))
def test_permits_matches_rank_comparison(threshold: LogLevel, level: LogLevel) -> None:
    assert threshold.permits(level) is (level.value <= threshold.value)


@pytest.mark.parametrize(
    "level, color, priority",
    [
        (LogLevel.ERROR, "red", 3),
        (LogLevel.WARNING, "yellow", 4),
        (LogLevel.NOTICE, "magenta", 5),
        (LogLevel.INFO, "blue", 6),
        (LogLevel.DEBUG, "cyan", 7),
    ],
)
def test_presentation_tables(level: LogLevel, color: str, priority: int) -> None:
    assert level.color == color
    assert level.syslog_priority == priority
    assert level.label == level.severity.upper()


@pytest.mark.parametrize(
    "number, expected",
    [
        (logging.CRITICAL, LogLevel.ERROR),
        (logging.ERROR, LogLevel.ERROR),
        (logging.WARNING, LogLevel.WARNING),
        (25, LogLevel.NOTICE),
        (logging.INFO, LogLevel.INFO),
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.NOTSET, LogLevel.DEBUG),
    ],
)
def test_from_python_level(number: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(number) is expected


def test_coerce_level_accepts_enum_and_name() -> None:
    assert coerce_level(LogLevel.NOTICE) is LogLevel.NOTICE
    assert coerce_level("notice") is LogLevel.NOTICE
