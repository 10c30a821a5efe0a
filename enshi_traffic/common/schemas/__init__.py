from .geometry import RoadSegmentGeometry
from .flow import FlowSample
from .weather import WeatherObservation
from .peak import PeakPeriodRule
from .metrics import FlowAnomaly, FlowWindowSummary, DerivedMetrics

__all__ = [
    "RoadSegmentGeometry",
    "FlowSample",
    "WeatherObservation",
    "PeakPeriodRule",
    "FlowAnomaly",
    "FlowWindowSummary",
    "DerivedMetrics",
]
