"""
Domain models for office windows and time slots.
"""

import enum
import re
from dataclasses import dataclass, field
from datetime import time
from typing import FrozenSet, List, Optional

import pendulum
from pendulum import DateTime, Time


TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$"

_TIME_OF_DAY_RE = re.compile(TIME_OF_DAY_PATTERN)


def parse_time_of_day(value: "str | time") -> Time:
    """
    Parse a wire value into a comparable time of day.

    Accepts ``HH:MM`` / ``HH:MM:SS`` strings and ``datetime.time`` instances.
    Resolution is one second; microseconds are dropped.

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return pendulum.time(value.hour, value.minute, value.second)

    if not isinstance(value, str):
        raise ValueError(f"Unsupported time of day value: {value!r}")

    match = _TIME_OF_DAY_RE.match(value.strip())
    if not match:
        raise ValueError(f"Time of day must have the format HH:MM or HH:MM:SS, got {value!r}")

    hour, minute, second = match.groups()
    return pendulum.time(int(hour), int(minute), int(second or 0))


def format_time_of_day(value: time) -> str:
    """Render a time of day as ``HH:MM:SS``."""
    return value.strftime("%H:%M:%S")


@dataclass(frozen=True)
class Interval:
    """
    Half-open range of times of day, ``[start, end)``.

    Invariant: start must be strictly before end.
    """
    start: Time
    end: Time

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Start time {format_time_of_day(self.start)} must be before "
                f"end time {format_time_of_day(self.end)}"
            )

    @classmethod
    def parse(cls, start: "str | time", end: "str | time") -> "Interval":
        """Parse both bounds and build an interval."""
        return cls(start=parse_time_of_day(start), end=parse_time_of_day(end))

    def duration_seconds(self) -> int:
        start = self.start.hour * 3600 + self.start.minute * 60 + self.start.second
        end = self.end.hour * 3600 + self.end.minute * 60 + self.end.second
        return end - start

    def overlaps(self, other: "Interval") -> bool:
        """Check if this interval overlaps with another (shared bounds do not count)."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)}-{format_time_of_day(self.end)}"


class DayOfWeek(enum.IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class WindowBound(enum.Enum):
    """Which side of an office window a candidate interval crossed."""
    START_BEFORE_OPEN = "start_before_open"
    END_AFTER_CLOSE = "end_after_close"


@dataclass(frozen=True)
class OfficeWindow:
    """
    An office with its working-hours window and working days.

    Read-only from the validator's point of view.
    """
    id: str
    name: str
    work_interval: Interval
    working_days: FrozenSet[DayOfWeek] = frozenset()
    created_at: DateTime = field(default_factory=lambda: pendulum.now("UTC"))

    def contains(self, candidate: Interval) -> bool:
        return contains_interval(self, candidate)

    def is_working_day(self, day: DayOfWeek) -> bool:
        """Check if the office is open on the given weekday."""
        return day in self.working_days

    def sorted_working_days(self) -> List[DayOfWeek]:
        """Working days in day-of-week order."""
        return sorted(self.working_days)


@dataclass
class TimeSlot:
    """
    A slot carved out of an office window.

    Containment and non-overlap are enforced by ``SlotValidator``, not here.
    """
    id: str
    office_id: str
    interval: Interval
    sequence: Optional[int] = None
    created_at: DateTime = field(default_factory=lambda: pendulum.now("UTC"))
    updated_at: Optional[DateTime] = None

    @property
    def start_time(self) -> Time:
        return self.interval.start

    @property
    def end_time(self) -> Time:
        return self.interval.end

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: #SEQ HH:MM:SS-HH:MM:SS (N min)
        """
        label = f"#{self.sequence} " if self.sequence is not None else ""
        return f"{label}{self.interval} ({self.interval.duration_seconds() // 60} min)"


def contains_interval(window: OfficeWindow, candidate: Interval) -> bool:
    """
    Check that a candidate lies inside the office's working window.

    Both window bounds are inclusive: a slot may start exactly at opening
    and end exactly at closing.
    """
    return window_boundary_violation(window, candidate) is None


def window_boundary_violation(window: OfficeWindow, candidate: Interval) -> Optional[WindowBound]:
    """
    Return the window bound crossed by the candidate, or None if contained.

    Start-before-open is reported first when both bounds are crossed.
    """
    if candidate.start < window.work_interval.start:
        return WindowBound.START_BEFORE_OPEN
    if candidate.end > window.work_interval.end:
        return WindowBound.END_AFTER_CLOSE
    return None
