from datetime import date, time
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..vocabulary import RuleStatus

class PeakPeriodRule(BaseModel):
    """
    A recurring time window during which elevated traffic is expected.
    Corresponds to PEAK_PERIOD_RULES table.
    """
    rule_id: Optional[str] = Field(None, description="Unique rule identifier")
    name: str = Field("", description="Rule name")
    description: Optional[str] = Field(None, description="Free text description")
    start_time: Optional[time] = Field(None, description="Start of the window (inclusive)")
    end_time: Optional[time] = Field(None, description="End of the window (inclusive), may be before start_time")
    applicable_days: Optional[int] = Field(
        None, ge=0, le=0b1111111, description="Day mask, bit0=Monday ... bit6=Sunday; None means every day"
    )
    effective_from: Optional[date] = Field(None, description="First date the rule applies")
    effective_to: Optional[date] = Field(None, description="Last date the rule applies")
    priority: int = Field(0, description="Stored priority, not used for matching")
    flow_threshold: Optional[int] = Field(None, ge=0, description="Flow rate that marks the period as busy")
    status: RuleStatus = Field(RuleStatus.ACTIVE, description="Whether the rule is active")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def effective_range_must_be_ordered(self):
        if self.effective_from and self.effective_to and self.effective_from > self.effective_to:
            raise ValueError('effective_from must not be after effective_to')
        return self
