from datetime import date, datetime, time

import pytest

from src.intern_attendance.intern_attendance.attendance.engine import AttendanceStateEngine
from src.intern_attendance.intern_attendance.attendance.model import AttendanceRecord, TimeWindow
from src.intern_attendance.intern_attendance.core.enums import AttendanceState
from src.intern_attendance.intern_attendance.core.exceptions import ValidationError


def _engine() -> AttendanceStateEngine:
    return AttendanceStateEngine(
        check_in_window=TimeWindow(start=time(7, 0), end=time(10, 0)),
        check_out_window=TimeWindow(start=time(15, 0), end=time(18, 0)),
    )


def _open_record(day: date = date(2026, 3, 2)) -> AttendanceRecord:
    return AttendanceRecord(record_id=1, user_id=1, work_date=day, check_in_time=datetime.combine(day, time(8, 0)))


@pytest.mark.parametrize(
    "clock_time, allowed",
    [
        (time(6, 59), False),
        (time(7, 0), True),
        (time(8, 30), True),
        (time(10, 0), True),
        (time(10, 1), False),
    ],
)
def test_check_in_window_edges(clock_time, allowed):
    now = datetime.combine(date(2026, 3, 2), clock_time)
    assert _engine().can_check_in(now, None) is allowed


def test_check_in_end_bound_is_exact_to_the_second():
    engine = _engine()
    assert engine.can_check_in(datetime(2026, 3, 2, 10, 0, 0), None)
    assert not engine.can_check_in(datetime(2026, 3, 2, 10, 0, 1), None)


def test_check_in_rejected_when_record_exists():
    now = datetime(2026, 3, 2, 8, 0)
    assert not _engine().can_check_in(now, _open_record())


def test_check_in_accepts_explicit_window():
    window = TimeWindow(start=time(22, 0), end=time(23, 30))
    engine = _engine()
    assert engine.can_check_in(datetime(2026, 3, 2, 23, 30), None, window)
    assert not engine.can_check_in(datetime(2026, 3, 2, 8, 0), None, window)


@pytest.mark.parametrize(
    "clock_time, allowed",
    [
        (time(14, 59), False),
        (time(15, 0), True),
        (time(18, 0), True),
        (time(18, 1), False),
    ],
)
def test_check_out_window_edges(clock_time, allowed):
    now = datetime.combine(date(2026, 3, 2), clock_time)
    assert _engine().can_check_out(now, _open_record()) is allowed


def test_check_out_needs_open_record():
    engine = _engine()
    now = datetime(2026, 3, 2, 16, 0)

    assert not engine.can_check_out(now, None)

    closed = AttendanceRecord(
        record_id=1,
        user_id=1,
        work_date=date(2026, 3, 2),
        check_in_time=datetime(2026, 3, 2, 8, 0),
        check_out_time=datetime(2026, 3, 2, 15, 30),
    )
    assert not engine.can_check_out(now, closed)


def test_state_machine_progression():
    engine = _engine()
    day = date(2026, 3, 2)
    open_record = _open_record(day)
    closed = AttendanceRecord(
        record_id=1,
        user_id=1,
        work_date=day,
        check_in_time=open_record.check_in_time,
        check_out_time=datetime(2026, 3, 2, 16, 0),
    )

    assert engine.state_of(None) == AttendanceState.NO_RECORD
    assert engine.state_of(open_record) == AttendanceState.CHECKED_IN
    assert engine.state_of(closed) == AttendanceState.CHECKED_OUT
    assert not open_record.is_completed
    assert closed.is_completed


def test_time_window_parse_and_str():
    window = TimeWindow.parse("07:00-10:00")
    assert window.start == time(7, 0)
    assert window.end == time(10, 0)
    assert str(window) == "07:00-10:00"


@pytest.mark.parametrize("value", ["", "0700-1000", "10:00-07:00", "25:00-26:00", "07:00"])
def test_time_window_parse_rejects_bad_values(value):
    with pytest.raises(ValidationError):
        TimeWindow.parse(value)
