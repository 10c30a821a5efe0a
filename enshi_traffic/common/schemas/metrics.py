from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..vocabulary import AnomalyMetric, AnomalyType, CongestionStatus, RiskLevel, ServiceLevel

class FlowAnomaly(BaseModel):
    """
    An abrupt change between two consecutive samples.
    """
    timestamp: datetime = Field(..., description="record_time of the later sample")
    metric: AnomalyMetric = Field(..., description="Which measurement changed")
    anomaly_type: AnomalyType = Field(..., description="spike/drop for flow, surge/plunge for speed")
    change_ratio: float = Field(..., description="(current - previous) / previous")
    change_percent: float = Field(..., description="change_ratio expressed in percent")
    previous_value: float = Field(..., description="Value of the earlier sample")
    current_value: float = Field(..., description="Value of the later sample")

    model_config = ConfigDict(frozen=True)

class FlowWindowSummary(BaseModel):
    """
    Aggregated statistics over a window of flow samples.
    """
    sample_count: int = Field(..., ge=0)
    average_flow_rate: Optional[float] = None
    average_speed: Optional[float] = None
    max_flow_rate: Optional[int] = None
    min_flow_rate: Optional[int] = None
    max_speed: Optional[float] = None
    min_speed: Optional[float] = None
    large_vehicle_percentage: float = 0.0
    medium_vehicle_percentage: float = 0.0
    small_vehicle_percentage: float = 0.0
    peak_factor: Optional[float] = Field(None, description="max flow / average flow")
    flow_variation: Optional[float] = Field(None, description="(max - min) / min flow in percent")
    speed_variation: Optional[float] = Field(None, description="(max - min) / min speed in percent")

    model_config = ConfigDict(frozen=True)

class DerivedMetrics(BaseModel):
    """
    Everything the core derives for one road section at one instant.
    Output only, never persisted by the core.
    """
    section_id: str
    computed_at: datetime
    current_flow: Optional[float] = None
    current_speed: Optional[float] = None
    effective_capacity: Optional[int] = None
    congestion_index: Optional[float] = None
    congestion_status: CongestionStatus = CongestionStatus.INSUFFICIENT_DATA
    service_level: ServiceLevel = ServiceLevel.UNKNOWN
    risk_index: Optional[float] = None
    risk_level: RiskLevel = RiskLevel.UNKNOWN
    weather_impact_index: Optional[float] = None
    suggested_speed_limit: Optional[int] = None
    peak_period_active: bool = False
    anomalies: List[FlowAnomaly] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
