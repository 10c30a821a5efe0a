"""
Infrastructure module initialization.
"""
from .memory_repository import InMemoryTrafficRepository
from .csv_loader import CSVSnapshotLoader

__all__ = [
    "InMemoryTrafficRepository",
    "CSVSnapshotLoader",
]
