"""
Typed reasons for rejecting a candidate time slot.

The validator returns these instead of raising or logging, leaving the
caller to decide how to report them.
"""

from dataclasses import dataclass

from .models import Interval, WindowBound, format_time_of_day


@dataclass(frozen=True)
class Violation:
    """Base class for all slot violations."""

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class OfficeNotFound(Violation):
    office_id: str

    @property
    def message(self) -> str:
        return f'Office with ID "{self.office_id}" not found.'


@dataclass(frozen=True)
class InvalidInterval(Violation):
    """Start/end could not be parsed or are not strictly ordered."""
    start: str
    end: str
    reason: str = "end time must be after start time"

    @property
    def message(self) -> str:
        return f"Invalid interval {self.start} - {self.end}: {self.reason}."


@dataclass(frozen=True)
class OutsideWorkingHours(Violation):
    bound: WindowBound
    candidate: Interval
    window: Interval

    @property
    def message(self) -> str:
        if self.bound is WindowBound.START_BEFORE_OPEN:
            return (
                f"Start time ({format_time_of_day(self.candidate.start)}) cannot be earlier "
                f"than the office opening time ({format_time_of_day(self.window.start)})."
            )
        return (
            f"End time ({format_time_of_day(self.candidate.end)}) cannot be later "
            f"than the office closing time ({format_time_of_day(self.window.end)})."
        )


@dataclass(frozen=True)
class OverlapsExistingSlot(Violation):
    slot_id: str
    interval: Interval

    @property
    def message(self) -> str:
        return f"Time slot overlaps existing slot {self.slot_id} ({self.interval})."
