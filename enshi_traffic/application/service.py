from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from ..anomaly import FlowAnomalyDetector
from ..capacity import (
    congestion_index as index_from_flow,
    congestion_status as status_from_index,
    current_flow,
    current_speed,
    effective_capacity,
)
from ..common.config import MetricsConfig
from ..common.logging import log_execution_time, setup_logger
from ..common.schemas import DerivedMetrics, FlowAnomaly, WeatherObservation
from ..common.vocabulary import CongestionStatus, RiskLevel
from ..domain.repositories import TrafficRepository
from ..flow import average_daily_flow, peak_valley_ratio, service_level
from ..geometry import risk_index as geometry_risk_index, risk_level as label_for_risk
from ..peak import any_rule_active
from ..weather import suggested_speed_limit as weather_speed_limit, weather_impact_index

logger = setup_logger(__name__)

class TrafficMetricsService:
    """
    Service layer for the metrics core.
    Fetches snapshots from the repository by identifier and runs the pure
    calculators over them. Missing data yields None or an explicit label.
    """
    def __init__(self, repository: TrafficRepository, settings: Optional[MetricsConfig] = None):
        self.repository = repository
        self.settings = settings or MetricsConfig()
        logger.setLevel(self.settings.logging.level.upper())
        self.detector = FlowAnomalyDetector(
            min_samples=self.settings.anomaly.min_samples,
            flow_change_threshold=self.settings.anomaly.flow_change_threshold,
            speed_change_threshold=self.settings.anomaly.speed_change_threshold,
            window=timedelta(days=self.settings.windows.anomaly_days),
        )

    # --- Capacity & congestion ---

    def current_traffic(self, section_id: str, now: datetime) -> Tuple[Optional[float], Optional[float]]:
        """Mean flow and speed of each point's latest sample in the last window."""
        window_start = now - timedelta(minutes=self.settings.windows.current_flow_minutes)
        latest = self.repository.latest_sample_per_point(section_id, window_start, now)
        if not latest:
            logger.debug(f"No recent samples for section {section_id}")
        return current_flow(latest), current_speed(latest)

    def effective_capacity(self, section_id: str) -> Optional[int]:
        return effective_capacity(self.repository.geometry_for(section_id))

    def congestion_index(self, section_id: str, now: datetime) -> Optional[float]:
        flow, _ = self.current_traffic(section_id, now)
        return index_from_flow(flow, self.effective_capacity(section_id))

    def congestion_status(self, section_id: str, now: datetime) -> CongestionStatus:
        return status_from_index(self.congestion_index(section_id, now))

    # --- Geometry risk ---

    def risk_index(self, section_id: str) -> float:
        return geometry_risk_index(self.repository.geometry_for(section_id))

    def risk_level(self, section_id: str) -> RiskLevel:
        return label_for_risk(self.risk_index(section_id))

    # --- Weather ---

    def weather_impact_index(self, observation: WeatherObservation) -> float:
        return weather_impact_index(observation)

    def current_weather(self, section_id: str, now: datetime) -> Optional[WeatherObservation]:
        region_id = self.repository.region_for(section_id)
        if region_id is None:
            logger.debug(f"Section {section_id} has no region, weather unavailable")
            return None
        return self.repository.weather_for(region_id, now)

    def suggested_speed_limit(self, section_id: str, now: datetime) -> Optional[int]:
        observation = self.current_weather(section_id, now)
        if observation is None:
            return None
        geometry = self.repository.geometry_for(section_id)
        base_limit = geometry.speed_limit or self.settings.default_speed_limit
        return weather_speed_limit(observation, base_limit)

    # --- Peak periods ---

    def peak_period_active(self, section_id: str, now: datetime) -> bool:
        return any_rule_active(self.repository.peak_rules_for(section_id), now)

    # --- Point time series ---

    def average_daily_flow(self, point_id: str, now: datetime) -> Optional[float]:
        days = self.settings.windows.daily_flow_days
        samples = self.repository.samples_in_window(point_id, now - timedelta(days=days), now)
        return average_daily_flow(samples, now, window_days=days)

    def peak_valley_ratio(self, point_id: str, now: datetime) -> Optional[float]:
        days = self.settings.windows.peak_valley_days
        samples = self.repository.samples_in_window(point_id, now - timedelta(days=days), now)
        return peak_valley_ratio(samples, now, window_days=days)

    def anomalies(self, point_id: str, now: datetime) -> List[FlowAnomaly]:
        samples = self.repository.samples_in_window(point_id, now - self.detector.window, now)
        return self.detector.detect(samples, now)

    # --- Everything at once ---

    @log_execution_time(logger)
    def derived_metrics(self, section_id: str, now: datetime) -> DerivedMetrics:
        geometry = self.repository.geometry_for(section_id)

        flow, speed = self.current_traffic(section_id, now)
        capacity = effective_capacity(geometry)
        index = index_from_flow(flow, capacity)
        risk = geometry_risk_index(geometry)

        observation = self.current_weather(section_id, now)
        impact = weather_impact_index(observation) if observation else None
        speed_limit = None
        if observation:
            speed_limit = weather_speed_limit(
                observation, geometry.speed_limit or self.settings.default_speed_limit
            )

        anomalies = []
        for point_id in self.repository.points_for(section_id):
            anomalies.extend(self.anomalies(point_id, now))
        anomalies.sort(key=lambda a: a.timestamp)

        metrics = DerivedMetrics(
            section_id=section_id,
            computed_at=now,
            current_flow=flow,
            current_speed=speed,
            effective_capacity=capacity,
            congestion_index=index,
            congestion_status=status_from_index(index),
            service_level=service_level(index, speed),
            risk_index=risk,
            risk_level=label_for_risk(risk),
            weather_impact_index=impact,
            suggested_speed_limit=speed_limit,
            peak_period_active=self.peak_period_active(section_id, now),
            anomalies=anomalies,
        )
        logger.debug(
            f"Section {section_id}: congestion={metrics.congestion_status.value} "
            f"risk={metrics.risk_level.value} anomalies={len(anomalies)}"
        )
        return metrics
