"""
Core validation logic for office time slots.

Decides whether a candidate slot may be stored: it must lie inside the
office window and must not overlap any other slot of the same office. The
validator only reads through the repository protocols; it never writes,
mutates or logs.
"""

from dataclasses import dataclass
from datetime import time
from typing import Iterable, Optional

from .models import Interval, TimeSlot, parse_time_of_day, window_boundary_violation
from .repositories import OfficeRepository, TimeSlotRepository
from .violations import (
    InvalidInterval,
    OfficeNotFound,
    OutsideWorkingHours,
    OverlapsExistingSlot,
    Violation,
)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of ``SlotValidator.validate_and_stage``.

    Exactly one of ``interval`` (accepted) or ``violation`` (rejected) is set.
    """
    interval: Optional[Interval] = None
    violation: Optional[Violation] = None

    @property
    def accepted(self) -> bool:
        return self.violation is None

    @classmethod
    def accept(cls, interval: Interval) -> "ValidationResult":
        return cls(interval=interval)

    @classmethod
    def reject(cls, violation: Violation) -> "ValidationResult":
        return cls(violation=violation)


def find_overlap(candidate: Interval, siblings: Iterable[TimeSlot]) -> Optional[TimeSlot]:
    """
    Return the first sibling whose interval overlaps the candidate.

    Example:
    Candidate: 09:30-10:30
    Siblings: [09:00-10:00, 10:30-11:00]
    Result: the 09:00-10:00 slot (10:30 touches but does not overlap)
    """
    for slot in siblings:
        if candidate.overlaps(slot.interval):
            return slot
    return None


class SlotValidator:
    """
    Gate for every slot create/update.

    Checks, in order:
    1. The office exists
    2. The candidate is a well-formed interval (start < end)
    3. The candidate lies inside the office working window
    4. The candidate does not overlap a sibling slot
    """

    def __init__(
        self,
        office_repository: OfficeRepository,
        time_slot_repository: TimeSlotRepository,
    ) -> None:
        self._office_repository = office_repository
        self._time_slot_repository = time_slot_repository

    async def validate_and_stage(
        self,
        office_id: str,
        start: "str | time",
        end: "str | time",
        exclude_slot_id: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate a candidate interval for an office.

        Args:
            office_id: Office the slot belongs to
            start: Candidate start (time of day or ``HH:MM[:SS]`` string)
            end: Candidate end (time of day or ``HH:MM[:SS]`` string)
            exclude_slot_id: Slot being updated, skipped in the overlap scan

        Returns:
            ValidationResult holding the parsed interval or the violation
        """
        office = await self._office_repository.get_by_id(office_id)
        if office is None:
            return ValidationResult.reject(OfficeNotFound(office_id))

        try:
            candidate = Interval.parse(start, end)
        except ValueError as exc:
            return ValidationResult.reject(
                InvalidInterval(start=str(start), end=str(end), reason=str(exc))
            )

        bound = window_boundary_violation(office, candidate)
        if bound is not None:
            return ValidationResult.reject(
                OutsideWorkingHours(bound=bound, candidate=candidate, window=office.work_interval)
            )

        siblings = await self._time_slot_repository.list_by_office(
            office_id, exclude_id=exclude_slot_id
        )
        conflict = find_overlap(candidate, siblings)
        if conflict is not None:
            return ValidationResult.reject(
                OverlapsExistingSlot(slot_id=conflict.id, interval=conflict.interval)
            )

        return ValidationResult.accept(candidate)
