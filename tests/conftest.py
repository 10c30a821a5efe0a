import pytest
from datetime import datetime, time, timedelta

from enshi_traffic.common.schemas import (
    FlowSample, PeakPeriodRule, RoadSegmentGeometry, WeatherObservation
)
from enshi_traffic.common.vocabulary import GeologicalRiskTag, SurfaceCondition
from enshi_traffic.infrastructure import InMemoryTrafficRepository

# Wednesday
NOW = datetime(2024, 6, 12, 10, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def mountain_geometry():
    return RoadSegmentGeometry(
        section_id="SEC_001",
        name="Shazhou ramp",
        length=2.4,
        average_slope=12.0,
        max_slope=16.0,
        average_curvature=0.2,
        surface_condition=SurfaceCondition.POOR,
        geological_risk_tags=[GeologicalRiskTag.LANDSLIDE],
        design_capacity=1000,
        speed_limit=60,
        start_elevation=420.0,
        end_elevation=708.0,
    )


@pytest.fixture
def flat_geometry():
    return RoadSegmentGeometry(
        section_id="SEC_002",
        name="Valley straight",
        average_slope=2.0,
        max_slope=3.0,
        average_curvature=0.01,
        surface_condition=SurfaceCondition.GOOD,
        design_capacity=1800,
        speed_limit=80,
    )


@pytest.fixture
def morning_rule():
    return PeakPeriodRule(
        rule_id="RULE_AM",
        name="Morning commute",
        start_time=time(7, 0),
        end_time=time(9, 0),
        applicable_days=0b0011111,
    )


@pytest.fixture
def night_rule():
    return PeakPeriodRule(
        rule_id="RULE_NIGHT",
        name="Night freight",
        start_time=time(22, 0),
        end_time=time(6, 0),
    )


@pytest.fixture
def clear_weather():
    return WeatherObservation(
        region_id="REGION_01",
        record_time=NOW - timedelta(minutes=30),
        precipitation=0.0,
        visibility=15000.0,
        wind_speed=2.0,
        temperature=22.0,
        humidity=60.0,
    )


def make_sample(record_time, flow_rate=None, average_speed=None, point_id="PT_001", **kwargs):
    return FlowSample(
        point_id=point_id,
        record_time=record_time,
        flow_rate=flow_rate,
        average_speed=average_speed,
        **kwargs,
    )


@pytest.fixture
def sample_factory():
    return make_sample


@pytest.fixture
def repository(mountain_geometry, morning_rule, clear_weather):
    repo = InMemoryTrafficRepository()
    repo.add_section(
        mountain_geometry,
        point_ids=["PT_001", "PT_002"],
        region_id="REGION_01",
        rules=[morning_rule],
    )
    repo.add_samples("PT_001", [
        make_sample(NOW - timedelta(minutes=50), 300, 40.0, "PT_001"),
        make_sample(NOW - timedelta(minutes=10), 400, 36.0, "PT_001"),
    ])
    repo.add_samples("PT_002", [
        make_sample(NOW - timedelta(minutes=20), 200, 44.0, "PT_002"),
    ])
    repo.add_weather("REGION_01", [clear_weather])
    return repo
