"""
Effective capacity and saturation-based congestion index for road sections.

Congestion index bands (saturation = current flow / effective capacity):

    saturation < 0.5   ->  0 - 1   clear
    saturation < 0.8   ->  1 - 5   light
    saturation < 1.0   ->  5 - 7   moderate
    saturation >= 1.0  ->  7 - 10  severe (capped at 10)

The bands meet at their boundaries, so the index is continuous in saturation.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional

from ..common.schemas import FlowSample, RoadSegmentGeometry
from ..common.vocabulary import CongestionStatus, SurfaceCondition

CURRENT_FLOW_WINDOW = timedelta(hours=1)
CONGESTED_INDEX_THRESHOLD = 6.0
MAX_CONGESTION_INDEX = 10.0


def slope_factor(average_slope: Optional[float]) -> float:
    if average_slope is None:
        return 1.0
    if average_slope > 10.0:
        return 0.6
    if average_slope > 5.0:
        return 0.8
    return 1.0


def curvature_factor(average_curvature: Optional[float]) -> float:
    if average_curvature is None:
        return 1.0
    if average_curvature > 0.15:
        return 0.7
    if average_curvature > 0.05:
        return 0.9
    return 1.0


def surface_factor(surface_condition: Optional[SurfaceCondition]) -> float:
    return 0.8 if surface_condition is SurfaceCondition.POOR else 1.0


def effective_capacity(geometry: RoadSegmentGeometry) -> Optional[int]:
    """
    Design capacity discounted by slope, curvature and surface, rounded to
    whole vehicles per hour. None when the design capacity is unknown.
    """
    if geometry.design_capacity is None:
        return None
    capacity = float(geometry.design_capacity)
    capacity *= slope_factor(geometry.average_slope)
    capacity *= curvature_factor(geometry.average_curvature)
    capacity *= surface_factor(geometry.surface_condition)
    return int(round(capacity))


def latest_per_point(
    samples_by_point: Mapping[str, Iterable[FlowSample]],
    now: datetime,
    window: timedelta = CURRENT_FLOW_WINDOW,
) -> List[FlowSample]:
    """
    Picks each point's most recent sample strictly inside (now - window, now).
    Points without such a sample are skipped.
    """
    window_start = now - window
    latest = []
    for samples in samples_by_point.values():
        recent = [s for s in samples if window_start < s.record_time < now]
        if recent:
            latest.append(max(recent, key=lambda s: s.record_time))
    return latest


def current_flow(latest_samples: List[FlowSample]) -> Optional[float]:
    """Mean flow across points; a point with no flow rate counts as 0."""
    if not latest_samples:
        return None
    return sum(s.flow_rate or 0 for s in latest_samples) / len(latest_samples)


def current_speed(latest_samples: List[FlowSample]) -> Optional[float]:
    """Mean speed across points, ignoring points without a speed."""
    speeds = [s.average_speed for s in latest_samples if s.average_speed is not None]
    if not speeds:
        return None
    return sum(speeds) / len(speeds)


def saturation(flow: Optional[float], capacity: Optional[float]) -> Optional[float]:
    if flow is None or capacity is None or capacity == 0:
        return None
    return flow / capacity


def congestion_index_from_saturation(value: float) -> float:
    if value < 0.5:
        return value * 2
    if value < 0.8:
        return 1.0 + (value - 0.5) * (4.0 / 0.3)
    if value < 1.0:
        return 5.0 + (value - 0.8) * (2.0 / 0.2)
    return min(7.0 + (value - 1.0) * 3.0, MAX_CONGESTION_INDEX)


def congestion_index(flow: Optional[float], capacity: Optional[float]) -> Optional[float]:
    value = saturation(flow, capacity)
    if value is None:
        return None
    return congestion_index_from_saturation(value)


def congestion_status(index: Optional[float]) -> CongestionStatus:
    if index is None:
        return CongestionStatus.INSUFFICIENT_DATA
    if index < 2.0:
        return CongestionStatus.CLEAR
    if index < 5.0:
        return CongestionStatus.LIGHT
    if index < 7.0:
        return CongestionStatus.MODERATE
    return CongestionStatus.SEVERE


def is_congested(index: Optional[float]) -> bool:
    return index is not None and index > CONGESTED_INDEX_THRESHOLD
