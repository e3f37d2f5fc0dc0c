from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one subject's attendance for one calendar day."""

    record_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.check_out_time is not None


@dataclass(frozen=True)
class TimeWindow:
    """Same-day wall-clock interval, inclusive on both ends."""

    start: time
    end: time

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(f"Window start {self.start:%H:%M} is after end {self.end:%H:%M}")

    @classmethod
    def parse(cls, value: str) -> "TimeWindow":
        """Parse ``"07:00-10:00"``."""
        if not value or "-" not in value:
            raise ValidationError(f"Invalid time window {value!r}, expected HH:MM-HH:MM")
        start_s, end_s = value.split("-", 1)
        return cls(start=parse_hhmm(start_s), end=parse_hhmm(end_s))

    def contains(self, moment: datetime) -> bool:
        # Wall-clock comparison: time() drops tzinfo, so aware and naive behave the same.
        return self.start <= moment.time() <= self.end

    def __str__(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


_DURATION_RE = re.compile(r"^\s*(\d+)h\s+(\d+)m\s*$")


@dataclass(frozen=True, order=True)
class Duration:
    hours: int
    minutes: int

    @classmethod
    def from_total_minutes(cls, total_minutes: int) -> "Duration":
        return cls(hours=total_minutes // 60, minutes=total_minutes % 60)

    @classmethod
    def parse(cls, value: str) -> "Duration":
        m = _DURATION_RE.match(value or "")
        if not m:
            raise ValidationError(f"Invalid duration {value!r}, expected '<h>h <m>m'")
        return cls(hours=int(m.group(1)), minutes=int(m.group(2)))

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}m"


@dataclass(frozen=True)
class AggregateRow:
    """Read-model: total completed hours of one subject over a date range."""

    user_id: int
    full_name: str
    email: str
    school: str
    total: Duration

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "school": self.school,
            "total_hours": str(self.total),
        }


@dataclass(frozen=True)
class DailyCount:
    work_date: date
    check_ins: int
    check_outs: int

    @property
    def label(self) -> str:
        return self.work_date.strftime("%a")

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "label": self.label,
            "check_ins": self.check_ins,
            "check_outs": self.check_outs,
        }
