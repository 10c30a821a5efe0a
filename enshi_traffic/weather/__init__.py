from .impact_scorer import (
    beaufort_force,
    effective_wind_force,
    weather_impact_index,
    terrain_factor,
    reduction_factor,
    suggested_speed_limit,
)
from .conditions import (
    precipitation_level,
    visibility_level,
    is_affecting_traffic,
    road_slippery_index,
    landslide_risk,
    feels_like_temperature,
    driving_advice_level,
    driving_advice,
    section_weather_speed_limit,
)

__all__ = [
    "beaufort_force",
    "effective_wind_force",
    "weather_impact_index",
    "terrain_factor",
    "reduction_factor",
    "suggested_speed_limit",
    "precipitation_level",
    "visibility_level",
    "is_affecting_traffic",
    "road_slippery_index",
    "landslide_risk",
    "feels_like_temperature",
    "driving_advice_level",
    "driving_advice",
    "section_weather_speed_limit",
]
