from .models import MetricsConfig, WindowConfig, AnomalyConfig, LoggingConfig
from .manager import ConfigManager

__all__ = [
    "MetricsConfig",
    "WindowConfig",
    "AnomalyConfig",
    "LoggingConfig",
    "ConfigManager",
]
