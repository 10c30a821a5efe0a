"""
Geometric risk scoring for mountain road sections.

The index is the sum of three rubric contributions:

    slope      up to 4 points (max slope preferred, average slope as fallback)
    curvature  up to 3 points
    geology    up to 3 points

No final clamp is applied to the sum.
"""
from typing import List, Optional

from ..common.schemas import RoadSegmentGeometry
from ..common.vocabulary import GeologicalRiskTag, RiskLevel, SurfaceCondition

STEEP_SLOPE_THRESHOLD = 8.0
SHARP_CURVE_THRESHOLD = 0.1

# (threshold, points), checked top-down, first strictly-greater wins
MAX_SLOPE_BANDS = [(15.0, 4.0), (10.0, 3.0), (8.0, 2.0), (5.0, 1.0)]
AVERAGE_SLOPE_BANDS = [(10.0, 3.0), (8.0, 2.0), (5.0, 1.0)]
CURVATURE_BANDS = [(0.15, 3.0), (0.1, 2.0), (0.05, 1.0)]

GEOLOGICAL_TAG_POINTS = {
    GeologicalRiskTag.LANDSLIDE: 3.0,
    GeologicalRiskTag.DEBRIS_FLOW: 3.0,
    GeologicalRiskTag.HIGH_RISK: 3.0,
    GeologicalRiskTag.MEDIUM_RISK: 2.0,
    GeologicalRiskTag.LOW_RISK: 1.0,
}

RISK_LEVEL_BANDS = [
    (8.0, RiskLevel.VERY_HIGH),
    (6.0, RiskLevel.HIGH),
    (4.0, RiskLevel.MEDIUM),
    (2.0, RiskLevel.LOW),
]


def _band_points(value: float, bands) -> float:
    for threshold, points in bands:
        if value > threshold:
            return points
    return 0.0


def slope_points(geometry: RoadSegmentGeometry) -> float:
    if geometry.max_slope is not None:
        return _band_points(geometry.max_slope, MAX_SLOPE_BANDS)
    if geometry.average_slope is not None:
        return _band_points(geometry.average_slope, AVERAGE_SLOPE_BANDS)
    return 0.0


def curvature_points(geometry: RoadSegmentGeometry) -> float:
    if geometry.average_curvature is None:
        return 0.0
    return _band_points(geometry.average_curvature, CURVATURE_BANDS)


def geological_points(geometry: RoadSegmentGeometry) -> float:
    """The most severe tag decides; tags do not accumulate."""
    return max((GEOLOGICAL_TAG_POINTS[tag] for tag in geometry.geological_risk_tags), default=0.0)


def risk_index(geometry: RoadSegmentGeometry) -> float:
    """
    Computes the geometric risk index of a section (nominally 0-10).
    Missing attributes contribute nothing.
    """
    return slope_points(geometry) + curvature_points(geometry) + geological_points(geometry)


def risk_level(index: Optional[float]) -> RiskLevel:
    if index is None:
        return RiskLevel.UNKNOWN
    for threshold, level in RISK_LEVEL_BANDS:
        if index >= threshold:
            return level
    return RiskLevel.VERY_LOW


def update_risk_level(geometry: RoadSegmentGeometry) -> RoadSegmentGeometry:
    """
    Returns a copy of the section carrying a freshly computed risk level.
    Persisting the copy is the caller's job.
    """
    return geometry.model_copy(update={"risk_level": risk_level(risk_index(geometry))})


def elevation_difference(geometry: RoadSegmentGeometry) -> Optional[float]:
    if geometry.start_elevation is None or geometry.end_elevation is None:
        return None
    return abs(geometry.end_elevation - geometry.start_elevation)


def is_steep_slope(geometry: RoadSegmentGeometry) -> bool:
    return geometry.average_slope is not None and geometry.average_slope > STEEP_SLOPE_THRESHOLD


def is_sharp_curve(geometry: RoadSegmentGeometry) -> bool:
    return geometry.average_curvature is not None and geometry.average_curvature > SHARP_CURVE_THRESHOLD


def is_mountain_road(geometry: RoadSegmentGeometry) -> bool:
    return (
        (geometry.average_slope is not None and geometry.average_slope > 5.0)
        or (geometry.average_curvature is not None and geometry.average_curvature > 0.05)
    )


def safety_hazards(geometry: RoadSegmentGeometry, active_event_count: int = 0) -> List[str]:
    """
    Lists human readable hazards of a section, empty when there are none.
    """
    hazards = []
    if geometry.max_slope is not None and geometry.max_slope > 10.0:
        hazards.append(f"steep section, max slope {geometry.max_slope}%")
    if geometry.average_curvature is not None and geometry.average_curvature > SHARP_CURVE_THRESHOLD:
        hazards.append(f"sharp curves, average curvature {geometry.average_curvature}")
    if geometry.geological_risk_tags:
        tags = ", ".join(sorted(tag.value for tag in geometry.geological_risk_tags))
        hazards.append(f"geological risk: {tags}")
    if geometry.surface_condition is SurfaceCondition.POOR:
        hazards.append("poor road surface")
    if active_event_count > 0:
        hazards.append(f"{active_event_count} active traffic event(s)")
    return hazards
