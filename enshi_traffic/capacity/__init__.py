from .estimator import (
    effective_capacity,
    latest_per_point,
    current_flow,
    current_speed,
    saturation,
    congestion_index_from_saturation,
    congestion_index,
    congestion_status,
    is_congested,
)

__all__ = [
    "effective_capacity",
    "latest_per_point",
    "current_flow",
    "current_speed",
    "saturation",
    "congestion_index_from_saturation",
    "congestion_index",
    "congestion_status",
    "is_congested",
]
