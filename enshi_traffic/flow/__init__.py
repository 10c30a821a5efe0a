from .sample_metrics import (
    total_vehicle_count,
    class_percentage,
    classify_congestion,
    is_peak_hour,
    speed_variation,
    age_in_minutes,
)
from .aggregates import (
    average_daily_flow,
    hourly_mean_flows,
    peak_valley_ratio,
    service_level,
    summarize_window,
)

__all__ = [
    "total_vehicle_count",
    "class_percentage",
    "classify_congestion",
    "is_peak_hour",
    "speed_variation",
    "age_in_minutes",
    "average_daily_flow",
    "hourly_mean_flows",
    "peak_valley_ratio",
    "service_level",
    "summarize_window",
]
