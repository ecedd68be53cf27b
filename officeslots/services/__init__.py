"""
Service layer helpers that orchestrate repositories and domain logic.
"""

from .locks import OfficeLocks
from .offices import OfficeService
from .time_slots import TimeSlotService

__all__ = ["OfficeLocks", "OfficeService", "TimeSlotService"]
