import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from enshi_traffic.application import TrafficMetricsService
from enshi_traffic.common.config import ConfigManager
from enshi_traffic.common.exceptions import EntityNotFoundError
from enshi_traffic.common.schemas import WeatherObservation
from enshi_traffic.common.vocabulary import (
    AnomalyType, CongestionStatus, RiskLevel, ServiceLevel
)
from enshi_traffic.infrastructure import InMemoryTrafficRepository

@pytest.fixture
def service(repository):
    return TrafficMetricsService(repository)

def test_current_traffic(service, now):
    flow, speed = service.current_traffic("SEC_001", now)
    # latest of PT_001 (400, 36) and PT_002 (200, 44)
    assert flow == 300.0
    assert speed == 40.0

def test_congestion(service, now):
    assert service.effective_capacity("SEC_001") == 336
    index = service.congestion_index("SEC_001", now)
    assert index == pytest.approx(5.0 + (300 / 336 - 0.8) * 10)
    assert service.congestion_status("SEC_001", now) is CongestionStatus.MODERATE

def test_congestion_without_recent_samples(service, now):
    later = now + timedelta(hours=3)
    assert service.current_traffic("SEC_001", later) == (None, None)
    assert service.congestion_status("SEC_001", later) is CongestionStatus.INSUFFICIENT_DATA

def test_risk(service):
    assert service.risk_index("SEC_001") == 10.0
    assert service.risk_level("SEC_001") is RiskLevel.VERY_HIGH

def test_suggested_speed_limit(service, repository, now):
    assert service.suggested_speed_limit("SEC_001", now) == 60

    repository.add_weather("REGION_01", [WeatherObservation(
        region_id="REGION_01", record_time=now - timedelta(minutes=5), precipitation=30,
    )])
    # index 6 -> 0.6, terrain 1.3: 60 * 0.6 / 1.3 = 27.7
    assert service.suggested_speed_limit("SEC_001", now) == 28

def test_speed_limit_falls_back_to_default(repository, flat_geometry, clear_weather, now):
    geometry = flat_geometry.model_copy(update={"speed_limit": None})
    repository.add_section(geometry, region_id="REGION_01")
    service = TrafficMetricsService(repository, ConfigManager.from_dictconfig({"default_speed_limit": 50}))
    assert service.suggested_speed_limit("SEC_002", now) == 50

def test_no_region_means_no_weather(repository, flat_geometry, now):
    repository.add_section(flat_geometry)
    service = TrafficMetricsService(repository)
    assert service.current_weather("SEC_002", now) is None
    assert service.suggested_speed_limit("SEC_002", now) is None

def test_peak_period_active(service, now):
    assert not service.peak_period_active("SEC_001", now)
    assert service.peak_period_active("SEC_001", now.replace(hour=8))

def test_point_series(service, repository, sample_factory, now):
    repository.add_samples("PT_003", [
        sample_factory(now - timedelta(days=1, hours=2), 800, point_id="PT_003"),
        sample_factory(now - timedelta(days=2, hours=7), 100, point_id="PT_003"),
    ])
    assert service.peak_valley_ratio("PT_003", now) == 8.0
    assert service.average_daily_flow("PT_003", now) == 450.0
    assert service.average_daily_flow("PT_UNKNOWN", now) is None

def test_anomalies(service, repository, sample_factory, now):
    repository.add_samples("PT_009", [
        sample_factory(now - timedelta(hours=10 - i), 100 if i < 5 else 160, 50.0, point_id="PT_009")
        for i in range(10)
    ])
    anomalies = service.anomalies("PT_009", now)
    assert len(anomalies) == 1
    assert anomalies[0].anomaly_type is AnomalyType.SPIKE

def test_derived_metrics(service, now):
    metrics = service.derived_metrics("SEC_001", now)
    assert metrics.section_id == "SEC_001"
    assert metrics.computed_at == now
    assert metrics.current_flow == 300.0
    assert metrics.effective_capacity == 336
    assert metrics.congestion_status is CongestionStatus.MODERATE
    assert metrics.service_level is ServiceLevel.D
    assert metrics.risk_level is RiskLevel.VERY_HIGH
    assert metrics.weather_impact_index == 0.0
    assert metrics.suggested_speed_limit == 60
    assert metrics.peak_period_active is False
    assert metrics.anomalies == []

def test_derived_metrics_collects_point_anomalies(repository, sample_factory, now):
    repository.add_samples("PT_002", [
        sample_factory(now - timedelta(hours=12 - i), 100 if i < 5 else 160, 50.0, point_id="PT_002")
        for i in range(10)
    ])
    metrics = TrafficMetricsService(repository).derived_metrics("SEC_001", now)
    assert len(metrics.anomalies) == 1

def test_unknown_section(service, now):
    with pytest.raises(EntityNotFoundError):
        service.derived_metrics("SEC_404", now)
    with pytest.raises(EntityNotFoundError):
        service.risk_index("SEC_404")

def test_repository_errors_propagate(now):
    repository = MagicMock()
    repository.geometry_for.side_effect = RuntimeError("connection lost")
    service = TrafficMetricsService(repository)
    with pytest.raises(RuntimeError):
        service.derived_metrics("SEC_001", now)

def test_works_against_any_repository(mountain_geometry, now):
    repository = MagicMock()
    repository.geometry_for.return_value = mountain_geometry
    repository.latest_sample_per_point.return_value = []
    repository.region_for.return_value = None
    repository.peak_rules_for.return_value = []
    repository.points_for.return_value = []

    metrics = TrafficMetricsService(repository).derived_metrics("SEC_001", now)

    assert metrics.congestion_status is CongestionStatus.INSUFFICIENT_DATA
    assert metrics.service_level is ServiceLevel.UNKNOWN
    assert metrics.weather_impact_index is None
    repository.latest_sample_per_point.assert_called_once_with(
        "SEC_001", now - timedelta(minutes=60), now
    )
