"""
Windowed aggregates over a monitoring point's flow samples.

Each function receives the caller's ``now`` and keeps only samples recorded
after ``now - window`` and not after ``now``; nothing is read from the clock.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..common.schemas import FlowSample, FlowWindowSummary
from ..common.vocabulary import ServiceLevel, VehicleClass
from .sample_metrics import total_vehicle_count

DAILY_FLOW_WINDOW_DAYS = 30
PEAK_VALLEY_WINDOW_DAYS = 7

SERVICE_LEVEL_LADDER = [
    # (index below, speed above, level)
    (2.0, 60.0, ServiceLevel.A),
    (3.0, 50.0, ServiceLevel.B),
    (4.0, 40.0, ServiceLevel.C),
    (6.0, 30.0, ServiceLevel.D),
    (8.0, 20.0, ServiceLevel.E),
]


def _recent_with_flow(samples: Sequence[FlowSample], now: datetime, window_days: int) -> List[FlowSample]:
    cutoff = now - timedelta(days=window_days)
    return [s for s in samples if cutoff < s.record_time <= now and s.flow_rate is not None]


def _mean(values) -> float:
    return sum(values) / len(values)


def average_daily_flow(
    samples: Sequence[FlowSample], now: datetime, window_days: int = DAILY_FLOW_WINDOW_DAYS
) -> Optional[float]:
    """
    Mean of the per-calendar-day mean flow rates over the trailing window.
    Returns None when no sample in the window carries a flow rate.
    """
    daily_flows: Dict = defaultdict(list)
    for sample in _recent_with_flow(samples, now, window_days):
        daily_flows[sample.record_time.date()].append(sample.flow_rate)

    if not daily_flows:
        return None
    return _mean([_mean(flows) for flows in daily_flows.values()])


def hourly_mean_flows(samples: Sequence[FlowSample]) -> Dict[int, float]:
    """Mean flow per hour of day (0-23), ignoring the date."""
    hourly_flows: Dict[int, List[int]] = defaultdict(list)
    for sample in samples:
        if sample.flow_rate is not None:
            hourly_flows[sample.record_time.hour].append(sample.flow_rate)
    return {hour: _mean(flows) for hour, flows in hourly_flows.items()}


def peak_valley_ratio(
    samples: Sequence[FlowSample], now: datetime, window_days: int = PEAK_VALLEY_WINDOW_DAYS
) -> Optional[float]:
    """
    Busiest hourly mean flow divided by the quietest one over the trailing window.
    Returns None without samples or when the quietest hour averages zero.
    """
    hourly = hourly_mean_flows(_recent_with_flow(samples, now, window_days))
    if not hourly:
        return None

    peak, valley = max(hourly.values()), min(hourly.values())
    if valley == 0:
        return None
    return peak / valley


def service_level(congestion_index: Optional[float], average_speed: Optional[float]) -> ServiceLevel:
    if congestion_index is None or average_speed is None:
        return ServiceLevel.UNKNOWN
    for index_below, speed_above, level in SERVICE_LEVEL_LADDER:
        if congestion_index < index_below and average_speed > speed_above:
            return level
    return ServiceLevel.F


def summarize_window(samples: Sequence[FlowSample]) -> FlowWindowSummary:
    """
    Aggregates a window of samples into summary statistics.
    Every statistic is None when its inputs are missing.
    """
    flows = [s.flow_rate for s in samples if s.flow_rate is not None]
    speeds = [s.average_speed for s in samples if s.average_speed is not None]

    average_flow = _mean(flows) if flows else None
    max_flow = max(flows) if flows else None
    min_flow = min(flows) if flows else None
    max_speed = max(speeds) if speeds else None
    min_speed = min(speeds) if speeds else None

    # Class shares over the whole window rather than a mean of per-sample shares
    class_totals = {vc: 0 for vc in VehicleClass}
    for s in samples:
        class_totals[VehicleClass.LARGE] += s.large_vehicle_count or 0
        class_totals[VehicleClass.MEDIUM] += s.medium_vehicle_count or 0
        class_totals[VehicleClass.SMALL] += s.small_vehicle_count or 0
    total_vehicles = sum(total_vehicle_count(s) for s in samples)

    def share(vehicle_class: VehicleClass) -> float:
        return class_totals[vehicle_class] / total_vehicles * 100 if total_vehicles else 0.0

    return FlowWindowSummary(
        sample_count=len(samples),
        average_flow_rate=average_flow,
        average_speed=_mean(speeds) if speeds else None,
        max_flow_rate=max_flow,
        min_flow_rate=min_flow,
        max_speed=max_speed,
        min_speed=min_speed,
        large_vehicle_percentage=share(VehicleClass.LARGE),
        medium_vehicle_percentage=share(VehicleClass.MEDIUM),
        small_vehicle_percentage=share(VehicleClass.SMALL),
        peak_factor=max_flow / average_flow if average_flow else None,
        flow_variation=(max_flow - min_flow) / min_flow * 100 if min_flow else None,
        speed_variation=(max_speed - min_speed) / min_speed * 100 if min_speed else None,
    )
