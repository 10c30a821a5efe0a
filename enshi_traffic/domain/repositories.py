"""
Query collaborator the metrics service reads snapshots from.
"""
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from ..common.schemas import FlowSample, PeakPeriodRule, RoadSegmentGeometry, WeatherObservation

class TrafficRepository(Protocol):
    """
    Read-only access to the section/point hierarchy and its time series.
    """
    def samples_in_window(self, point_id: str, start: datetime, end: datetime) -> Sequence[FlowSample]:
        """Samples of one point with start <= record_time <= end, ascending."""
        ...

    def latest_sample_per_point(
        self, section_id: str, window_start: datetime, window_end: datetime
    ) -> List[FlowSample]:
        """At most one sample per point of the section, strictly inside the window."""
        ...

    def weather_for(self, region_id: str, at: datetime) -> Optional[WeatherObservation]:
        """Most recent observation recorded at or before `at`."""
        ...

    def geometry_for(self, section_id: str) -> RoadSegmentGeometry:
        ...

    def peak_rules_for(self, section_id: str) -> Sequence[PeakPeriodRule]:
        ...

    def points_for(self, section_id: str) -> Sequence[str]:
        ...

    def region_for(self, section_id: str) -> Optional[str]:
        ...
