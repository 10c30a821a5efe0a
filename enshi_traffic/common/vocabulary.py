"""
Enumerated tag vocabularies and result labels shared by all calculators.
"""
from enum import Enum


class SurfaceCondition(Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class GeologicalRiskTag(Enum):
    LANDSLIDE = "landslide"
    DEBRIS_FLOW = "debris-flow"
    HIGH_RISK = "high-risk"
    MEDIUM_RISK = "medium-risk"
    LOW_RISK = "low-risk"


class WeatherCondition(Enum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    OVERCAST = "overcast"
    LIGHT_RAIN = "light-rain"
    MODERATE_RAIN = "moderate-rain"
    HEAVY_RAIN = "heavy-rain"
    RAINSTORM = "rainstorm"
    PERSISTENT_RAIN = "persistent-rain"
    FOG = "fog"
    DENSE_FOG = "dense-fog"
    SNOW = "snow"
    ICE = "ice"
    SLEET = "sleet"
    HAIL = "hail"
    THUNDERSTORM = "thunderstorm"


FROZEN_CONDITIONS = frozenset({
    WeatherCondition.SNOW,
    WeatherCondition.ICE,
    WeatherCondition.SLEET,
    WeatherCondition.HAIL,
})


class RiskLevel(Enum):
    VERY_HIGH = "very-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    VERY_LOW = "very-low"
    UNKNOWN = "unknown"


class CongestionLevel(Enum):
    """Per-sample congestion classification."""
    SEVERE = "severe"
    MODERATE = "moderate"
    LIGHT = "light"
    CLEAR = "clear"
    UNKNOWN = "unknown"


class CongestionStatus(Enum):
    """Section-level label derived from the congestion index."""
    CLEAR = "clear"
    LIGHT = "light"
    MODERATE = "moderate"
    SEVERE = "severe"
    INSUFFICIENT_DATA = "insufficient-data"


class ServiceLevel(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    UNKNOWN = "unknown"


class RuleStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class VehicleClass(Enum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"


class AnomalyMetric(Enum):
    FLOW = "flow"
    SPEED = "speed"


class AnomalyType(Enum):
    SPIKE = "spike"
    DROP = "drop"
    SURGE = "surge"
    PLUNGE = "plunge"


class HazardLevel(Enum):
    """Generic five-step severity ladder used by weather advisories."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"
