import csv
import os
from typing import Dict, List

from pydantic import ValidationError

from ..common.exceptions import InvalidInputError
from ..common.logging import setup_logger
from ..common.schemas import FlowSample, WeatherObservation

logger = setup_logger(__name__)

class CSVSnapshotLoader:
    """
    Reads exported flow and weather records into immutable snapshots.
    Column names match the schema field names; empty cells are treated as missing.
    """
    def __init__(self, input_dir: str):
        self.input_dir = input_dir

    def _read_rows(self, filename: str) -> List[Dict[str, str]]:
        path = os.path.join(self.input_dir, filename)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Snapshot file not found: {path}")
        with open(path, mode='r', newline='', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            return [
                {key: value for key, value in row.items() if value not in ("", None)}
                for row in reader
            ]

    def load_flow_samples(self, filename: str = "flow_samples.csv") -> Dict[str, List[FlowSample]]:
        """Returns samples grouped by point_id, each series ascending by record_time."""
        series: Dict[str, List[FlowSample]] = {}
        for line_no, row in enumerate(self._read_rows(filename), start=2):
            try:
                sample = FlowSample(**row)
            except ValidationError as e:
                raise InvalidInputError(f"{filename} line {line_no}: {e}") from e
            series.setdefault(sample.point_id or "unknown", []).append(sample)

        for samples in series.values():
            samples.sort(key=lambda s: s.record_time)
        logger.info(f"Loaded {sum(len(s) for s in series.values())} flow samples for {len(series)} points")
        return series

    def load_weather(self, filename: str = "weather.csv") -> Dict[str, List[WeatherObservation]]:
        """Returns observations grouped by region_id, ascending by record_time."""
        series: Dict[str, List[WeatherObservation]] = {}
        for line_no, row in enumerate(self._read_rows(filename), start=2):
            try:
                observation = WeatherObservation(**row)
            except ValidationError as e:
                raise InvalidInputError(f"{filename} line {line_no}: {e}") from e
            series.setdefault(observation.region_id or "unknown", []).append(observation)

        for observations in series.values():
            observations.sort(key=lambda o: o.record_time)
        logger.info(f"Loaded {sum(len(o) for o in series.values())} weather observations")
        return series
