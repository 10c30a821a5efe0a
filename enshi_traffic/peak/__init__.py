from .rule_matcher import (
    WORKDAYS_MASK,
    WEEKENDS_MASK,
    days_mask,
    applies_to,
    is_in_peak_period,
    any_rule_active,
    next_peak_period_start,
    overlapping_peak_minutes,
    applicable_days_text,
    time_range_text,
    effective_range_text,
    rule_status_description,
    rule_summary,
)

__all__ = [
    "WORKDAYS_MASK",
    "WEEKENDS_MASK",
    "days_mask",
    "applies_to",
    "is_in_peak_period",
    "any_rule_active",
    "next_peak_period_start",
    "overlapping_peak_minutes",
    "applicable_days_text",
    "time_range_text",
    "effective_range_text",
    "rule_status_description",
    "rule_summary",
]
