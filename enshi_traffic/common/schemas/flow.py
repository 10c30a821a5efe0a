from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

class FlowSample(BaseModel):
    """
    A single traffic flow record reported by a monitoring point.
    Corresponds to TRAFFIC_FLOW_RECORDS table.
    """
    point_id: Optional[str] = Field(None, description="Monitoring point that produced the record")
    record_time: datetime = Field(..., description="Time the record was taken")
    flow_rate: Optional[int] = Field(None, ge=0, description="Vehicles per hour")
    average_speed: Optional[float] = Field(None, ge=0, description="Average speed in km/h")
    occupancy_rate: Optional[float] = Field(None, ge=0, le=100, description="Lane occupancy in percent (0-100)")
    large_vehicle_count: Optional[int] = Field(None, ge=0, description="Number of large vehicles")
    medium_vehicle_count: Optional[int] = Field(None, ge=0, description="Number of medium vehicles")
    small_vehicle_count: Optional[int] = Field(None, ge=0, description="Number of small vehicles")
    max_speed: Optional[float] = Field(None, ge=0, description="Maximum observed speed in km/h")
    min_speed: Optional[float] = Field(None, ge=0, description="Minimum observed speed in km/h")
    headway: Optional[float] = Field(None, ge=0, description="Average headway in seconds")
    direction: Optional[str] = Field(None, description="Travel direction")
    data_quality: Optional[int] = Field(None, ge=0, le=100, description="Data quality score (0-100)")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def speeds_must_be_ordered(self):
        if self.max_speed is not None and self.min_speed is not None and self.min_speed > self.max_speed:
            raise ValueError('min_speed must not exceed max_speed')
        return self
