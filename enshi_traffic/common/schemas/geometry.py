from typing import FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..vocabulary import GeologicalRiskTag, RiskLevel, SurfaceCondition

class RoadSegmentGeometry(BaseModel):
    """
    Static geometry of a road section.
    Corresponds to the ROAD_SECTIONS attributes the metrics core reads.
    """
    section_id: str = Field(..., description="Unique road section identifier")
    name: Optional[str] = Field(None, description="Human readable section name")
    length: Optional[float] = Field(None, ge=0, description="Section length in km")
    average_slope: Optional[float] = Field(None, description="Average longitudinal slope in percent")
    max_slope: Optional[float] = Field(None, description="Maximum longitudinal slope in percent")
    average_curvature: Optional[float] = Field(None, ge=0, description="Average curvature (1/radius)")
    surface_condition: Optional[SurfaceCondition] = Field(None, description="Pavement condition tag")
    geological_risk_tags: FrozenSet[GeologicalRiskTag] = Field(
        default_factory=frozenset, description="Geological hazard tags"
    )
    design_capacity: Optional[int] = Field(None, ge=0, description="Design capacity in vehicles per hour")
    speed_limit: Optional[int] = Field(None, gt=0, description="Posted speed limit in km/h")
    start_elevation: Optional[float] = Field(None, description="Elevation at section start in m")
    end_elevation: Optional[float] = Field(None, description="Elevation at section end in m")
    risk_level: Optional[RiskLevel] = Field(None, description="Last computed risk level label")

    model_config = ConfigDict(frozen=True)

    @field_validator('section_id')
    @classmethod
    def section_id_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('section_id must not be blank')
        return v
