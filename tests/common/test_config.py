import pytest
from pathlib import Path
from omegaconf import OmegaConf

from enshi_traffic.common.config import ConfigManager, MetricsConfig
from enshi_traffic.common.exceptions import ConfigurationError

def test_defaults_without_overrides():
    settings = ConfigManager.from_dictconfig(None)
    assert isinstance(settings, MetricsConfig)
    assert settings.default_speed_limit == 60
    assert settings.windows.daily_flow_days == 30
    assert settings.windows.current_flow_minutes == 60
    assert settings.anomaly.min_samples == 10

def test_partial_override_keeps_other_defaults():
    cfg = OmegaConf.create({"anomaly": {"flow_change_threshold": 0.8}})
    settings = ConfigManager.from_dictconfig(cfg)
    assert settings.anomaly.flow_change_threshold == 0.8
    assert settings.anomaly.speed_change_threshold == 0.3

def test_unknown_key_rejected():
    with pytest.raises(ConfigurationError):
        ConfigManager.from_dictconfig({"windows": {"fortnight_days": 14}})

def test_wrong_type_rejected():
    with pytest.raises(ConfigurationError):
        ConfigManager.from_dictconfig({"default_speed_limit": "fast"})

def test_non_positive_window_rejected():
    with pytest.raises(ConfigurationError):
        ConfigManager.from_dictconfig({"windows": {"anomaly_days": 0}})

def test_min_samples_floor():
    with pytest.raises(ConfigurationError):
        ConfigManager.from_dictconfig({"anomaly": {"min_samples": 1}})

def test_load_from_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "metrics:\n"
        "  default_speed_limit: 50\n"
        "  logging:\n"
        "    level: DEBUG\n"
    )
    settings = ConfigManager(tmp_path).load_metrics_config()
    assert settings.default_speed_limit == 50
    assert settings.logging.level == "DEBUG"

def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path).load_metrics_config("absent")

def test_load_missing_metrics_key(tmp_path):
    (tmp_path / "config.yaml").write_text("report:\n  now: null\n")
    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path).load_metrics_config()

def test_project_config_is_valid():
    conf_dir = Path(__file__).resolve().parents[2] / "conf"
    settings = ConfigManager(conf_dir).load_metrics_config()
    assert settings == MetricsConfig()
