"""
Adapters layer - Storage implementations.
"""

from .memory import InMemoryOfficeRepository, InMemoryTimeSlotRepository
from .yaml_store import OfficeStore, build_store, load_store

__all__ = [
    "InMemoryOfficeRepository",
    "InMemoryTimeSlotRepository",
    "OfficeStore",
    "build_store",
    "load_store",
]
