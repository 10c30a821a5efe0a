from .service import TrafficMetricsService

__all__ = ["TrafficMetricsService"]
