"""
Weather advisories derived from a single observation: descriptive levels,
slipperiness, landslide risk and condition-based speed limits for a section.
"""
from typing import Optional

from ..common.schemas import RoadSegmentGeometry, WeatherObservation
from ..common.validation import validate_positive
from ..common.vocabulary import FROZEN_CONDITIONS, HazardLevel, WeatherCondition
from ..geometry import is_sharp_curve, is_steep_slope

PRECIPITATION_LEVELS = [
    (0.1, "none"),
    (10.0, "light"),
    (25.0, "moderate"),
    (50.0, "heavy"),
    (100.0, "rainstorm"),
    (250.0, "heavy-rainstorm"),
]

VISIBILITY_LEVELS = [
    (50.0, "extremely-dense-fog"),
    (200.0, "dense-fog"),
    (500.0, "heavy-fog"),
    (1000.0, "fog"),
    (2000.0, "mist"),
    (5000.0, "haze"),
    (10000.0, "light-haze"),
]

CONDITION_SPEED_MULTIPLIERS = {
    WeatherCondition.HEAVY_RAIN: 0.6,
    WeatherCondition.MODERATE_RAIN: 0.7,
    WeatherCondition.LIGHT_RAIN: 0.8,
    WeatherCondition.DENSE_FOG: 0.5,
    WeatherCondition.FOG: 0.7,
    WeatherCondition.SNOW: 0.5,
    WeatherCondition.ICE: 0.5,
}

DRIVING_ADVICE = {
    HazardLevel.VERY_HIGH: "avoid non-essential travel; road conditions are dangerous",
    HazardLevel.HIGH: "drive with great care, keep a safe distance and slow down",
    HazardLevel.MEDIUM: "watch the road surface and reduce speed",
    HazardLevel.LOW: "weather slightly affects driving, stay alert",
    HazardLevel.NONE: "good driving weather",
}

_ESCALATION = {
    HazardLevel.LOW: HazardLevel.MEDIUM,
    HazardLevel.MEDIUM: HazardLevel.HIGH,
    HazardLevel.HIGH: HazardLevel.VERY_HIGH,
}


def precipitation_level(precipitation: Optional[float]) -> str:
    if precipitation is None:
        return "none"
    for upper, label in PRECIPITATION_LEVELS:
        if precipitation < upper:
            return label
    return "extreme-rainstorm"


def visibility_level(visibility: Optional[float]) -> str:
    if visibility is None:
        return "unknown"
    for upper, label in VISIBILITY_LEVELS:
        if visibility < upper:
            return label
    return "good"


def is_affecting_traffic(observation: WeatherObservation) -> bool:
    heavy_rain = observation.precipitation is not None and observation.precipitation >= 25.0
    low_visibility = observation.visibility is not None and observation.visibility < 1000
    strong_wind = observation.wind_speed is not None and observation.wind_speed >= 10.8
    frozen = observation.is_snow_ice or observation.condition in FROZEN_CONDITIONS
    freezing = observation.temperature is not None and observation.temperature <= 0
    return heavy_rain or low_visibility or strong_wind or frozen or freezing


def road_slippery_index(observation: WeatherObservation) -> int:
    """Slipperiness of the road surface from 0 (dry) to 5."""
    index = 0
    precipitation = observation.precipitation
    if precipitation is not None:
        if precipitation > 30:
            index += 3
        elif precipitation > 15:
            index += 2
        elif precipitation > 5:
            index += 1

    if observation.humidity is not None:
        if observation.humidity > 95:
            index += 2
        elif observation.humidity > 85:
            index += 1

    if observation.temperature is not None:
        if observation.temperature < 0:
            index += 3
        elif observation.temperature < 4:
            index += 2

    if observation.is_foggy:
        index += 1
    return min(5, index)


def landslide_risk(observation: WeatherObservation) -> HazardLevel:
    precipitation = observation.precipitation
    if not precipitation:
        return HazardLevel.NONE

    if precipitation > 100:
        level = HazardLevel.VERY_HIGH
    elif precipitation > 50:
        level = HazardLevel.HIGH
    elif precipitation > 30:
        level = HazardLevel.MEDIUM
    elif precipitation > 15:
        level = HazardLevel.LOW
    else:
        level = HazardLevel.NONE

    # Soil saturated by persistent rain raises the risk one step
    if observation.condition is WeatherCondition.PERSISTENT_RAIN:
        level = _ESCALATION.get(level, level)
    return level


def feels_like_temperature(observation: WeatherObservation) -> Optional[float]:
    t = observation.temperature
    wind = observation.wind_speed
    if t is None or wind is None:
        return t

    if t <= 10 and wind > 1.3:
        wind_kmh = wind * 3.6
        return 13.12 + 0.6215 * t - 11.37 * wind_kmh ** 0.16 + 0.3965 * t * wind_kmh ** 0.16

    rh = observation.humidity
    if t >= 27 and rh is not None:
        return (-8.784695 + 1.61139411 * t + 2.338549 * rh
                - 0.14611605 * t * rh - 0.012308094 * t * t
                - 0.016424828 * rh * rh + 0.002211732 * t * t * rh
                + 0.00072546 * t * rh * rh - 0.000003582 * t * t * rh * rh)
    return t


def driving_advice_level(impact_index: float) -> HazardLevel:
    if impact_index >= 8.0:
        return HazardLevel.VERY_HIGH
    if impact_index >= 6.0:
        return HazardLevel.HIGH
    if impact_index >= 4.0:
        return HazardLevel.MEDIUM
    if impact_index >= 2.0:
        return HazardLevel.LOW
    return HazardLevel.NONE


def driving_advice(impact_index: float) -> str:
    return DRIVING_ADVICE[driving_advice_level(impact_index)]


def section_weather_speed_limit(
    geometry: RoadSegmentGeometry,
    condition: Optional[WeatherCondition],
    visibility: Optional[float],
    base_limit: Optional[int] = None,
) -> Optional[int]:
    """
    Condition-based speed limit for a section: scales the base limit by the
    weather condition, caps it by visibility, then tightens it on steep or
    sharply curved sections. None when no base limit is known.
    """
    if base_limit is None:
        base_limit = geometry.speed_limit
    if base_limit is None:
        return None
    validate_positive("base_limit", base_limit)

    limit = int(round(base_limit * CONDITION_SPEED_MULTIPLIERS.get(condition, 1.0)))

    if visibility is not None:
        if visibility < 50:
            limit = 20
        elif visibility < 100:
            limit = min(limit, 30)
        elif visibility < 200:
            limit = min(limit, 40)
        elif visibility < 500:
            limit = min(limit, 60)

    if is_steep_slope(geometry):
        limit = int(round(limit * 0.8))
    if is_sharp_curve(geometry):
        limit = int(round(limit * 0.7))
    return limit
