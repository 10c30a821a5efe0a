from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..vocabulary import WeatherCondition

class WeatherObservation(BaseModel):
    """
    Weather observation for a region at a point in time.
    Corresponds to WEATHER_RECORDS table.
    """
    region_id: Optional[str] = Field(None, description="Region the observation belongs to")
    record_time: datetime = Field(..., description="Observation time")
    condition: Optional[WeatherCondition] = Field(None, description="Weather condition tag")
    precipitation: Optional[float] = Field(None, ge=0, description="Precipitation in mm")
    visibility: Optional[float] = Field(None, ge=0, description="Visibility in m")
    wind_speed: Optional[float] = Field(None, ge=0, description="Wind speed in m/s")
    wind_force: Optional[int] = Field(None, ge=0, le=17, description="Beaufort wind force, derived from wind_speed when absent")
    wind_direction: Optional[int] = Field(None, ge=0, lt=360, description="Wind direction in degrees")
    temperature: Optional[float] = Field(None, description="Air temperature in °C")
    humidity: Optional[float] = Field(None, ge=0, le=100, description="Relative humidity in percent")
    is_snow_ice: bool = Field(False, description="Snow or ice on the road")
    is_foggy: bool = Field(False, description="Fog reported")
    has_thunderstorm: bool = Field(False, description="Thunderstorm reported")
    cloud_cover: Optional[int] = Field(None, ge=0, le=100, description="Cloud cover in percent")
    pressure: Optional[float] = Field(None, gt=0, description="Air pressure in hPa")
    warning_info: Optional[str] = Field(None, description="Active weather warning text")

    model_config = ConfigDict(frozen=True)
