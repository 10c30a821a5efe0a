import pytest
from datetime import datetime

from enshi_traffic.common.exceptions import InvalidInputError
from enshi_traffic.common.vocabulary import WeatherCondition
from enshi_traffic.infrastructure import CSVSnapshotLoader

FLOW_CSV = """point_id,record_time,flow_rate,average_speed,occupancy_rate,large_vehicle_count
PT_001,2024-06-12T09:45:00,420,38.5,22.0,30
PT_002,2024-06-12T09:30:00,310,,18.5,
PT_001,2024-06-12T09:15:00,380,41.0,20.0,25
"""

WEATHER_CSV = """region_id,record_time,condition,precipitation,visibility,wind_speed,is_foggy
REGION_01,2024-06-12T09:00:00,fog,0.0,300,1.2,true
REGION_01,2024-06-12T08:00:00,cloudy,0.0,8000,2.5,false
"""

@pytest.fixture
def snapshot_dir(tmp_path):
    (tmp_path / "flow_samples.csv").write_text(FLOW_CSV)
    (tmp_path / "weather.csv").write_text(WEATHER_CSV)
    return tmp_path

def test_load_flow_samples(snapshot_dir):
    series = CSVSnapshotLoader(str(snapshot_dir)).load_flow_samples()

    assert set(series) == {"PT_001", "PT_002"}
    pt1 = series["PT_001"]
    assert [s.flow_rate for s in pt1] == [380, 420]
    assert pt1[0].record_time == datetime(2024, 6, 12, 9, 15)
    # Empty cells become missing values
    assert series["PT_002"][0].average_speed is None
    assert series["PT_002"][0].large_vehicle_count is None

def test_load_weather(snapshot_dir):
    series = CSVSnapshotLoader(str(snapshot_dir)).load_weather()

    observations = series["REGION_01"]
    assert len(observations) == 2
    latest = observations[-1]
    assert latest.condition is WeatherCondition.FOG
    assert latest.is_foggy is True
    assert observations[0].is_foggy is False

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CSVSnapshotLoader(str(tmp_path)).load_flow_samples()

def test_invalid_row_reports_line(tmp_path):
    (tmp_path / "flow_samples.csv").write_text(
        "point_id,record_time,flow_rate\n"
        "PT_001,2024-06-12T09:45:00,420\n"
        "PT_001,2024-06-12T10:00:00,-5\n"
    )
    with pytest.raises(InvalidInputError, match="line 3"):
        CSVSnapshotLoader(str(tmp_path)).load_flow_samples()
