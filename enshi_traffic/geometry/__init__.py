from .risk_model import (
    risk_index,
    risk_level,
    update_risk_level,
    elevation_difference,
    is_steep_slope,
    is_sharp_curve,
    is_mountain_road,
    safety_hazards,
)

__all__ = [
    "risk_index",
    "risk_level",
    "update_risk_level",
    "elevation_difference",
    "is_steep_slope",
    "is_sharp_curve",
    "is_mountain_road",
    "safety_hazards",
]
