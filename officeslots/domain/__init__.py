"""
Domain layer - Office windows, slots and the slot validation rules.
"""

from .models import (
    DayOfWeek,
    Interval,
    OfficeWindow,
    TimeSlot,
    WindowBound,
    contains_interval,
    format_time_of_day,
    parse_time_of_day,
)
from .slot_validator import SlotValidator, ValidationResult, find_overlap

__all__ = [
    "DayOfWeek",
    "Interval",
    "OfficeWindow",
    "TimeSlot",
    "WindowBound",
    "contains_interval",
    "format_time_of_day",
    "parse_time_of_day",
    "SlotValidator",
    "ValidationResult",
    "find_overlap",
]
