"""
Peak-period rule matching.

Day masks use bit0 for Monday through bit6 for Sunday, matching ISO weekday
numbers (1=Monday) via ``1 << (day_of_week - 1)``. A rule whose end time is
earlier than its start time wraps past midnight.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from ..common.schemas import PeakPeriodRule
from ..common.validation import validate_day_of_week, validate_time_of_day, validate_window
from ..common.vocabulary import RuleStatus

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WORKDAYS_MASK = 0b0011111
WEEKENDS_MASK = 0b1100000
LOOKAHEAD_DAYS = 7


def days_mask(days: Iterable[int]) -> int:
    """
    Builds a day mask from ISO weekday numbers (1=Monday ... 7=Sunday).
    Values outside 1..7 are ignored; an empty iterable yields 0 (no day).
    """
    mask = 0
    for day in days:
        if 1 <= day <= 7:
            mask |= 1 << (day - 1)
    return mask


def is_day_applicable(rule: PeakPeriodRule, day_of_week: int) -> bool:
    if rule.applicable_days is None:
        return True
    return (rule.applicable_days & (1 << (day_of_week - 1))) != 0


def _time_in_window(rule: PeakPeriodRule, moment: time) -> bool:
    start, end = rule.start_time, rule.end_time
    if end < start:
        return moment >= start or moment <= end
    return start <= moment <= end


def applies_to(rule: PeakPeriodRule, day_of_week: int, hour: int, minute: int) -> bool:
    """
    Checks whether the rule covers the given weekday (1=Monday) and time of day.
    Both window bounds are inclusive.
    """
    validate_day_of_week(day_of_week)
    validate_time_of_day(hour, minute)

    if rule.start_time is None or rule.end_time is None:
        return False
    if not is_day_applicable(rule, day_of_week):
        return False
    return _time_in_window(rule, time(hour, minute))


def _within_effective_dates(rule: PeakPeriodRule, day: date) -> bool:
    if rule.effective_from is not None and day < rule.effective_from:
        return False
    if rule.effective_to is not None and day > rule.effective_to:
        return False
    return True


def is_in_peak_period(rule: PeakPeriodRule, timestamp: datetime) -> bool:
    """
    Like applies_to, but for a full timestamp and honoring the effective date range.
    """
    if timestamp is None or rule.start_time is None or rule.end_time is None:
        return False
    if not _within_effective_dates(rule, timestamp.date()):
        return False
    if not is_day_applicable(rule, timestamp.isoweekday()):
        return False
    return _time_in_window(rule, timestamp.time())


def any_rule_active(rules: Iterable[PeakPeriodRule], timestamp: datetime) -> bool:
    """
    A section is in a peak period when any active rule matches within its
    effective date range. Rule priority is not consulted.
    """
    return any(
        rule.status is RuleStatus.ACTIVE and is_in_peak_period(rule, timestamp)
        for rule in rules
    )


def next_peak_period_start(rule: PeakPeriodRule, now: datetime) -> Optional[datetime]:
    """
    Returns when the rule's next peak period begins, or None when it has no
    upcoming window within a week.
    """
    if rule.start_time is None or rule.status is RuleStatus.INACTIVE:
        return None

    today = now.date()

    if rule.effective_from is not None and today < rule.effective_from:
        for offset in range(LOOKAHEAD_DAYS):
            candidate = rule.effective_from + timedelta(days=offset)
            if rule.effective_to is not None and candidate > rule.effective_to:
                return None
            if is_day_applicable(rule, candidate.isoweekday()):
                return datetime.combine(candidate, rule.start_time)
        return None

    if rule.effective_to is not None and today > rule.effective_to:
        return None

    today_start = datetime.combine(today, rule.start_time)
    if now < today_start and is_day_applicable(rule, today.isoweekday()):
        return today_start

    for offset in range(1, LOOKAHEAD_DAYS + 1):
        candidate = today + timedelta(days=offset)
        if rule.effective_to is not None and candidate > rule.effective_to:
            return None
        if is_day_applicable(rule, candidate.isoweekday()):
            return datetime.combine(candidate, rule.start_time)
    return None


def overlapping_peak_minutes(rule: PeakPeriodRule, start: datetime, end: datetime) -> int:
    """
    Counts the minutes of [start, end] that fall inside the rule's peak periods,
    sampling once per minute from start.
    """
    validate_window(start, end)
    total = 0
    current = start
    while current <= end:
        if is_in_peak_period(rule, current):
            total += 1
        current += timedelta(minutes=1)
    return total


def applicable_days_text(rule: PeakPeriodRule) -> str:
    if rule.applicable_days is None:
        return "every day"
    names = [name for i, name in enumerate(DAY_NAMES) if rule.applicable_days & (1 << i)]
    return ", ".join(names) if names else "no days"


def time_range_text(rule: PeakPeriodRule) -> str:
    if rule.start_time is None or rule.end_time is None:
        return ""
    return f"{rule.start_time:%H:%M} - {rule.end_time:%H:%M}"


def effective_range_text(rule: PeakPeriodRule) -> str:
    if rule.effective_from is None and rule.effective_to is None:
        return "permanent"
    if rule.effective_to is None:
        return f"from {rule.effective_from:%Y-%m-%d}"
    if rule.effective_from is None:
        return f"until {rule.effective_to:%Y-%m-%d}"
    return f"{rule.effective_from:%Y-%m-%d} to {rule.effective_to:%Y-%m-%d}"


def rule_status_description(rule: PeakPeriodRule, now: datetime) -> str:
    if rule.status is RuleStatus.INACTIVE:
        return "rule is inactive"
    today = now.date()
    if rule.effective_from is not None and today < rule.effective_from:
        return f"rule takes effect on {rule.effective_from:%Y-%m-%d}"
    if rule.effective_to is not None and today > rule.effective_to:
        return f"rule ended on {rule.effective_to:%Y-%m-%d}"
    if is_in_peak_period(rule, now):
        return "currently in peak period"
    return "currently outside peak period"


def rule_summary(rule: PeakPeriodRule) -> str:
    summary = rule.name
    time_range = time_range_text(rule)
    if time_range:
        summary += f" ({time_range})"
    summary += f" {applicable_days_text(rule)} - {rule.status.value}"
    return summary.strip()
