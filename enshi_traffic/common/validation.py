"""
Boundary checks run before data reaches the pure calculators.
"""
from datetime import datetime
from typing import Optional

from .exceptions import InvalidInputError


def validate_window(start: datetime, end: datetime) -> None:
    if start is None or end is None:
        raise InvalidInputError("Time window bounds must both be set")
    if start > end:
        raise InvalidInputError(f"Invalid time window: start {start.isoformat()} is after end {end.isoformat()}")


def validate_day_of_week(day_of_week: int) -> None:
    if not 1 <= day_of_week <= 7:
        raise InvalidInputError(f"day_of_week must be in 1..7 (1=Monday), got {day_of_week}")


def validate_time_of_day(hour: int, minute: int) -> None:
    if not 0 <= hour <= 23:
        raise InvalidInputError(f"hour must be in 0..23, got {hour}")
    if not 0 <= minute <= 59:
        raise InvalidInputError(f"minute must be in 0..59, got {minute}")


def validate_positive(name: str, value: Optional[float]) -> None:
    if value is None or value <= 0:
        raise InvalidInputError(f"{name} must be a positive number, got {value}")
