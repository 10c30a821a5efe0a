"""
Domain module initialization.
"""
from .repositories import TrafficRepository

__all__ = ["TrafficRepository"]
