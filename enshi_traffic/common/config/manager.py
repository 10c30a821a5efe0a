from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import Optional, Union

from .models import MetricsConfig
from ..exceptions import ConfigurationError

class ConfigManager:
    """Centralizes loading and validation of the metrics configuration"""

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)

    def load_metrics_config(self, profile: str = "config") -> MetricsConfig:
        """Loads conf/<profile>.yaml and validates it against MetricsConfig"""
        config_path = self.config_dir / f"{profile}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        cfg = OmegaConf.load(config_path)
        if 'metrics' not in cfg:
            raise ConfigurationError(f"Missing required config key: metrics ({config_path})")

        return self.from_dictconfig(cfg.metrics)

    @staticmethod
    def from_dictconfig(cfg: Optional[Union[DictConfig, dict]] = None) -> MetricsConfig:
        """Merges user values over the structured defaults; unknown keys or bad types fail"""
        schema = OmegaConf.structured(MetricsConfig)
        try:
            merged = OmegaConf.merge(schema, cfg or {})
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid metrics configuration: {e}") from e

        settings: MetricsConfig = OmegaConf.to_object(merged)
        if settings.default_speed_limit <= 0:
            raise ConfigurationError("default_speed_limit must be positive")
        for name in ("daily_flow_days", "peak_valley_days", "anomaly_days", "current_flow_minutes"):
            if getattr(settings.windows, name) <= 0:
                raise ConfigurationError(f"windows.{name} must be positive")
        if settings.anomaly.min_samples < 2:
            raise ConfigurationError("anomaly.min_samples must be at least 2")
        return settings
