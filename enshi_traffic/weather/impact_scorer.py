"""
Weather impact index and speed-limit suggestion for mountain roads.

The impact index is additive over precipitation, visibility, fog, snow/ice,
wind, temperature, warnings and thunderstorms, then clamped to [0, 10]. The
suggested speed limit scales a base limit down by an index-banded reduction
factor and divides by a terrain amplification factor in [1.0, 2.0].
"""
from bisect import bisect_right
from typing import Optional

from ..common.schemas import WeatherObservation
from ..common.validation import validate_positive

MAX_IMPACT_INDEX = 10.0
MAX_TERRAIN_FACTOR = 2.0

# Upper bounds (m/s) of Beaufort forces 0..11; anything above is force 12
BEAUFORT_UPPER_BOUNDS = [0.3, 1.6, 3.4, 5.5, 8.0, 10.8, 13.9, 17.2, 20.8, 24.5, 28.5, 32.7]

PRECIPITATION_BANDS = [(10.0, 2.0), (25.0, 4.0), (50.0, 6.0), (100.0, 8.0)]
VISIBILITY_BANDS = [(50.0, 5.0), (100.0, 4.0), (200.0, 2.5), (500.0, 1.0)]
REDUCTION_BANDS = [(8.0, 0.5), (6.0, 0.6), (4.0, 0.7), (2.0, 0.8)]


def beaufort_force(wind_speed: Optional[float]) -> int:
    if wind_speed is None:
        return 0
    return bisect_right(BEAUFORT_UPPER_BOUNDS, wind_speed)


def effective_wind_force(observation: WeatherObservation) -> int:
    """Reported Beaufort force, or the one implied by the wind speed."""
    if observation.wind_force is not None:
        return observation.wind_force
    return beaufort_force(observation.wind_speed)


def precipitation_points(precipitation: Optional[float]) -> float:
    if not precipitation:
        return 0.0
    for upper, points in PRECIPITATION_BANDS:
        if precipitation < upper:
            return points
    return 10.0


def visibility_points(visibility: Optional[float]) -> float:
    if visibility is None:
        return 0.0
    for upper, points in VISIBILITY_BANDS:
        if visibility < upper:
            return points
    return 0.0


def wind_points(wind_force: int) -> float:
    if wind_force >= 8:
        return 3.0
    if wind_force >= 6:
        return 1.5
    return 0.0


def temperature_points(temperature: Optional[float], precipitation: Optional[float]) -> float:
    if temperature is None:
        return 0.0
    if temperature < 0:
        # Freezing with precipitation means ice on the road
        return 5.0 if precipitation is not None and precipitation > 0 else 2.0
    if temperature < 3:
        return 1.0
    return 0.0


def weather_impact_index(observation: WeatherObservation) -> float:
    """
    Scores how much the observed weather degrades driving, from 0 (none) to 10.
    """
    index = precipitation_points(observation.precipitation)
    index += visibility_points(observation.visibility)
    if observation.is_foggy:
        index += 3.0
    if observation.is_snow_ice:
        index += 5.0
    index += wind_points(effective_wind_force(observation))
    index += temperature_points(observation.temperature, observation.precipitation)
    if observation.warning_info:
        index += 2.0
    if observation.has_thunderstorm:
        index += 2.0
    return min(MAX_IMPACT_INDEX, max(0.0, index))


def terrain_factor(observation: WeatherObservation) -> float:
    """
    How much mountain terrain amplifies the weather: 1.0 (none) to 2.0.
    """
    factor = 1.0
    if observation.precipitation is not None and observation.precipitation > 10:
        factor += 0.3
    if observation.visibility is not None and observation.visibility < 1000:
        factor += 0.3
    if observation.wind_speed is not None and observation.wind_speed > 8.0:
        factor += 0.2
    if observation.temperature is not None and observation.temperature < 5:
        factor += 0.2
    return min(MAX_TERRAIN_FACTOR, round(factor, 2))


def reduction_factor(impact_index: float) -> float:
    for lower, factor in REDUCTION_BANDS:
        if impact_index >= lower:
            return factor
    return 1.0


def suggested_speed_limit(observation: WeatherObservation, base_limit: int) -> int:
    """
    Suggests a speed limit (km/h) for the observed weather, rounded to the nearest integer.
    """
    validate_positive("base_limit", base_limit)
    index = weather_impact_index(observation)
    return int(round(base_limit * reduction_factor(index) / terrain_factor(observation)))
