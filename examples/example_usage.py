"""Example: using the attendance engine and services without Flask.

Controllers are a thin layer; the rules live in the engine and the services.
"""

from datetime import datetime

from src.intern_attendance.intern_attendance.attendance.engine import AttendanceStateEngine, format_duration
from src.intern_attendance.intern_attendance.attendance.model import TimeWindow


def main():
    engine = AttendanceStateEngine(
        check_in_window=TimeWindow.parse("07:00-10:00"),
        check_out_window=TimeWindow.parse("15:00-18:00"),
    )

    now = datetime(2026, 3, 2, 8, 45)
    print("can check in at 08:45:", engine.can_check_in(now, None))
    print("duration 09:00 -> 17:30:", format_duration(engine.compute_duration(
        datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 17, 30)
    )))
    print("open session:", format_duration(engine.compute_duration(now, None)))


if __name__ == "__main__":
    main()
