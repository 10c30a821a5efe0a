import pytest
from datetime import datetime

from enshi_traffic.common.exceptions import InvalidInputError, TrafficMetricsError
from enshi_traffic.common.validation import (
    validate_day_of_week, validate_positive, validate_time_of_day, validate_window
)

def test_window_ok_when_equal():
    moment = datetime(2024, 6, 12, 8, 0)
    validate_window(moment, moment)

def test_window_reversed():
    with pytest.raises(InvalidInputError):
        validate_window(datetime(2024, 6, 12, 9), datetime(2024, 6, 12, 8))

def test_window_missing_bound():
    with pytest.raises(InvalidInputError):
        validate_window(None, datetime(2024, 6, 12))

@pytest.mark.parametrize("day", [0, 8, -1])
def test_day_of_week_out_of_range(day):
    with pytest.raises(InvalidInputError):
        validate_day_of_week(day)

@pytest.mark.parametrize("hour,minute", [(24, 0), (-1, 0), (12, 60)])
def test_time_of_day_out_of_range(hour, minute):
    with pytest.raises(InvalidInputError):
        validate_time_of_day(hour, minute)

def test_positive_rejects_zero_and_none():
    for value in (0, -5, None):
        with pytest.raises(InvalidInputError):
            validate_positive("base_limit", value)

def test_errors_share_base_class():
    assert issubclass(InvalidInputError, TrafficMetricsError)
