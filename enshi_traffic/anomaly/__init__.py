from .detector import FlowAnomalyDetector, change_ratio, detect_anomalies

__all__ = ["FlowAnomalyDetector", "change_ratio", "detect_anomalies"]
