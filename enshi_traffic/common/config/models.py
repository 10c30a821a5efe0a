from dataclasses import dataclass, field

@dataclass
class WindowConfig:
    daily_flow_days: int = 30
    peak_valley_days: int = 7
    anomaly_days: int = 7
    current_flow_minutes: int = 60

@dataclass
class AnomalyConfig:
    min_samples: int = 10
    flow_change_threshold: float = 0.5
    speed_change_threshold: float = 0.3

@dataclass
class LoggingConfig:
    level: str = "INFO"

@dataclass
class MetricsConfig:
    default_speed_limit: int = 60
    windows: WindowConfig = field(default_factory=WindowConfig)
    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
