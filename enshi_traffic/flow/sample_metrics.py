"""
Per-sample traffic flow metrics.
"""
from datetime import datetime
from typing import Optional

from ..common.schemas import FlowSample
from ..common.vocabulary import CongestionLevel, VehicleClass

# Occupancy thresholds (percent) tuned for mountain roads
SEVERE_OCCUPANCY = 40.0
MODERATE_OCCUPANCY = 25.0
LIGHT_OCCUPANCY = 15.0

MORNING_PEAK_HOURS = range(7, 9)
EVENING_PEAK_HOURS = range(17, 19)


def _class_count(sample: FlowSample, vehicle_class: VehicleClass) -> Optional[int]:
    if vehicle_class is VehicleClass.LARGE:
        return sample.large_vehicle_count
    if vehicle_class is VehicleClass.MEDIUM:
        return sample.medium_vehicle_count
    return sample.small_vehicle_count


def total_vehicle_count(sample: FlowSample) -> int:
    return sum(_class_count(sample, vc) or 0 for vc in VehicleClass)


def class_percentage(sample: FlowSample, vehicle_class: VehicleClass) -> float:
    total = total_vehicle_count(sample)
    count = _class_count(sample, vehicle_class)
    if total == 0 or count is None:
        return 0.0
    return count / total * 100


def classify_congestion(sample: FlowSample) -> CongestionLevel:
    """
    Classifies a single record from occupancy and average speed.
    Both are required; otherwise the level is UNKNOWN.
    """
    occupancy, speed = sample.occupancy_rate, sample.average_speed
    if occupancy is None or speed is None:
        return CongestionLevel.UNKNOWN

    if occupancy >= SEVERE_OCCUPANCY or (occupancy >= MODERATE_OCCUPANCY and speed <= 20):
        return CongestionLevel.SEVERE
    if occupancy >= MODERATE_OCCUPANCY or (occupancy >= LIGHT_OCCUPANCY and speed <= 30):
        return CongestionLevel.MODERATE
    if occupancy >= LIGHT_OCCUPANCY or speed <= 40:
        return CongestionLevel.LIGHT
    return CongestionLevel.CLEAR


def is_peak_hour(sample: FlowSample) -> bool:
    """Weekday morning (07-09) or evening (17-19) commute, end hour excluded."""
    moment = sample.record_time
    if moment.isoweekday() > 5:
        return False
    return moment.hour in MORNING_PEAK_HOURS or moment.hour in EVENING_PEAK_HOURS


def speed_variation(sample: FlowSample) -> Optional[float]:
    # Range/4 approximates the standard deviation
    if sample.max_speed is None or sample.min_speed is None or sample.average_speed is None:
        return None
    return (sample.max_speed - sample.min_speed) / 4.0


def age_in_minutes(sample: FlowSample, now: datetime) -> int:
    return int((now - sample.record_time).total_seconds() // 60)
