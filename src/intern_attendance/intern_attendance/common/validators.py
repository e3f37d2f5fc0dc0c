from __future__ import annotations

from datetime import date

from ..core.exceptions import ValidationError


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be a positive number")
    return int(value)


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")
    return start, end


def require_at_most(value: int, maximum: int, field_name: str) -> int:
    value = require_positive(value, field_name)
    if value > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return value
