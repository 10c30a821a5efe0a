from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from ..capacity import latest_per_point
from ..common.exceptions import EntityNotFoundError
from ..common.schemas import FlowSample, PeakPeriodRule, RoadSegmentGeometry, WeatherObservation
from ..common.validation import validate_window
from ..domain.repositories import TrafficRepository

class InMemoryTrafficRepository(TrafficRepository):
    """
    Holds snapshots in dictionaries keyed by identifier.
    Sections reference their points, rules and region by id only.
    """
    def __init__(self):
        self._geometry: Dict[str, RoadSegmentGeometry] = {}
        self._section_points: Dict[str, List[str]] = {}
        self._section_region: Dict[str, Optional[str]] = {}
        self._section_rules: Dict[str, List[PeakPeriodRule]] = {}
        self._samples: Dict[str, List[FlowSample]] = defaultdict(list)
        self._weather: Dict[str, List[WeatherObservation]] = defaultdict(list)

    def add_section(
        self,
        geometry: RoadSegmentGeometry,
        point_ids: Iterable[str] = (),
        region_id: Optional[str] = None,
        rules: Iterable[PeakPeriodRule] = (),
    ) -> None:
        section_id = geometry.section_id
        self._geometry[section_id] = geometry
        self._section_points[section_id] = list(point_ids)
        self._section_region[section_id] = region_id
        self._section_rules[section_id] = list(rules)

    def add_samples(self, point_id: str, samples: Iterable[FlowSample]) -> None:
        series = self._samples[point_id]
        series.extend(samples)
        series.sort(key=lambda s: s.record_time)

    def add_weather(self, region_id: str, observations: Iterable[WeatherObservation]) -> None:
        series = self._weather[region_id]
        series.extend(observations)
        series.sort(key=lambda o: o.record_time)

    def _require_section(self, section_id: str) -> None:
        if section_id not in self._geometry:
            raise EntityNotFoundError(f"Unknown road section: {section_id}")

    def samples_in_window(self, point_id: str, start: datetime, end: datetime) -> Sequence[FlowSample]:
        validate_window(start, end)
        return [s for s in self._samples.get(point_id, []) if start <= s.record_time <= end]

    def latest_sample_per_point(
        self, section_id: str, window_start: datetime, window_end: datetime
    ) -> List[FlowSample]:
        self._require_section(section_id)
        validate_window(window_start, window_end)
        series = {pid: self._samples.get(pid, []) for pid in self._section_points[section_id]}
        return latest_per_point(series, window_end, window_end - window_start)

    def weather_for(self, region_id: str, at: datetime) -> Optional[WeatherObservation]:
        candidates = [o for o in self._weather.get(region_id, []) if o.record_time <= at]
        return candidates[-1] if candidates else None

    def geometry_for(self, section_id: str) -> RoadSegmentGeometry:
        self._require_section(section_id)
        return self._geometry[section_id]

    def peak_rules_for(self, section_id: str) -> Sequence[PeakPeriodRule]:
        self._require_section(section_id)
        return list(self._section_rules[section_id])

    def points_for(self, section_id: str) -> Sequence[str]:
        self._require_section(section_id)
        return list(self._section_points[section_id])

    def region_for(self, section_id: str) -> Optional[str]:
        self._require_section(section_id)
        return self._section_region[section_id]
