from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..common.logging import setup_logger
from ..common.schemas import FlowAnomaly, FlowSample
from ..common.vocabulary import AnomalyMetric, AnomalyType

logger = setup_logger(__name__)


def change_ratio(previous: float, current: float) -> float:
    """Relative change; 0 when the previous value is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous


class FlowAnomalyDetector:
    """
    Scans consecutive samples for abrupt flow and speed changes.
    Every qualifying pair yields its own anomaly; adjacent ones are not merged.
    """
    def __init__(
        self,
        min_samples: int = 10,
        flow_change_threshold: float = 0.5,
        speed_change_threshold: float = 0.3,
        window: timedelta = timedelta(days=7),
    ):
        self.min_samples = min_samples
        self.flow_change_threshold = flow_change_threshold
        self.speed_change_threshold = speed_change_threshold
        self.window = window

    def detect(self, samples: Sequence[FlowSample], now: datetime) -> List[FlowAnomaly]:
        cutoff = now - self.window
        recent = sorted(
            (s for s in samples if cutoff < s.record_time <= now),
            key=lambda s: s.record_time
        )

        if len(recent) < self.min_samples:
            logger.debug(f"Only {len(recent)} samples in window, need {self.min_samples}")
            return []

        anomalies = []
        for prev, curr in zip(recent, recent[1:]):
            flow_anomaly = self._check_flow(prev, curr)
            if flow_anomaly:
                anomalies.append(flow_anomaly)
            speed_anomaly = self._check_speed(prev, curr)
            if speed_anomaly:
                anomalies.append(speed_anomaly)

        logger.debug(f"Found {len(anomalies)} anomalies in {len(recent)} samples")
        return anomalies

    def _check_flow(self, prev: FlowSample, curr: FlowSample) -> Optional[FlowAnomaly]:
        if prev.flow_rate is None or curr.flow_rate is None:
            return None
        ratio = change_ratio(prev.flow_rate, curr.flow_rate)
        if abs(ratio) <= self.flow_change_threshold:
            return None
        return self._build(curr, AnomalyMetric.FLOW,
                           AnomalyType.SPIKE if ratio > 0 else AnomalyType.DROP,
                           ratio, prev.flow_rate, curr.flow_rate)

    def _check_speed(self, prev: FlowSample, curr: FlowSample) -> Optional[FlowAnomaly]:
        if prev.average_speed is None or curr.average_speed is None:
            return None
        ratio = change_ratio(prev.average_speed, curr.average_speed)
        if abs(ratio) <= self.speed_change_threshold:
            return None
        return self._build(curr, AnomalyMetric.SPEED,
                           AnomalyType.SURGE if ratio > 0 else AnomalyType.PLUNGE,
                           ratio, prev.average_speed, curr.average_speed)

    @staticmethod
    def _build(curr: FlowSample, metric: AnomalyMetric, anomaly_type: AnomalyType,
               ratio: float, previous: float, current: float) -> FlowAnomaly:
        return FlowAnomaly(
            timestamp=curr.record_time,
            metric=metric,
            anomaly_type=anomaly_type,
            change_ratio=ratio,
            change_percent=round(ratio * 100, 2),
            previous_value=previous,
            current_value=current,
        )


def detect_anomalies(samples: Sequence[FlowSample], now: datetime) -> List[FlowAnomaly]:
    """Runs a detector with the default thresholds."""
    return FlowAnomalyDetector().detect(samples, now)
