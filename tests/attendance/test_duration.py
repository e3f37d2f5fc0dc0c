from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.intern_attendance.intern_attendance.attendance.engine import (
    IN_PROGRESS,
    AttendanceStateEngine,
    format_duration,
)
from src.intern_attendance.intern_attendance.attendance.model import Duration, TimeWindow
from src.intern_attendance.intern_attendance.core.exceptions import InvalidIntervalError, ValidationError


@pytest.fixture
def engine():
    return AttendanceStateEngine(
        check_in_window=TimeWindow.parse("07:00-10:00"),
        check_out_window=TimeWindow.parse("15:00-18:00"),
    )


def test_same_day_duration(engine):
    d = engine.compute_duration(datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 17, 30))
    assert d == Duration(hours=8, minutes=30)
    assert str(d) == "8h 30m"


def test_open_session_is_in_progress(engine):
    result = engine.compute_duration(datetime(2026, 3, 2, 9, 0), None)
    assert result is IN_PROGRESS
    assert format_duration(result) == "In Progress"


def test_duration_spans_midnight(engine):
    d = engine.compute_duration(datetime(2026, 3, 1, 23, 0), datetime(2026, 3, 2, 1, 0))
    assert format_duration(d) == "2h 0m"


def test_duration_over_24_hours_is_not_clipped(engine):
    d = engine.compute_duration(datetime(2026, 3, 1, 9, 0), datetime(2026, 3, 2, 10, 15))
    assert str(d) == "25h 15m"


def test_seconds_are_truncated_not_rounded(engine):
    d = engine.compute_duration(datetime(2026, 3, 2, 9, 0, 0), datetime(2026, 3, 2, 9, 59, 59, 999000))
    assert str(d) == "0h 59m"


def test_zero_length_session(engine):
    moment = datetime(2026, 3, 2, 9, 0)
    assert str(engine.compute_duration(moment, moment)) == "0h 0m"


def test_checkout_before_checkin_is_rejected(engine):
    with pytest.raises(InvalidIntervalError):
        engine.compute_duration(datetime(2026, 3, 2, 17, 0), datetime(2026, 3, 2, 9, 0))


def test_invalid_interval_is_a_validation_error(engine):
    with pytest.raises(ValidationError):
        engine.compute_duration(datetime(2026, 3, 2, 17, 0), datetime(2026, 3, 2, 16, 59))


def test_aware_duration_counts_real_time_across_dst(engine):
    tz = ZoneInfo("Europe/Berlin")
    # Clocks jump 02:00 -> 03:00 on 2026-03-29, so the wall-clock 3h is 2h of real time.
    check_in = datetime(2026, 3, 29, 0, 30, tzinfo=tz)
    check_out = datetime(2026, 3, 29, 3, 30, tzinfo=tz)
    assert str(engine.compute_duration(check_in, check_out)) == "2h 0m"


def test_aware_duration_across_zones(engine):
    check_in = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
    check_out = datetime(2026, 3, 2, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert str(engine.compute_duration(check_in, check_out)) == "1h 0m"


def test_duration_parse_recovers_formatted_value():
    assert Duration.parse("8h 30m") == Duration(hours=8, minutes=30)
    assert Duration.parse(" 125h 5m ").total_minutes == 125 * 60 + 5


@pytest.mark.parametrize("value", ["", "8h", "8:30", "In Progress", "-1h 0m"])
def test_duration_parse_rejects_garbage(value):
    with pytest.raises(ValidationError):
        Duration.parse(value)
