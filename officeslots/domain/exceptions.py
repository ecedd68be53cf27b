"""
Domain-specific exception hierarchy for the office slot application.
"""

from typing import NoReturn

from .violations import OfficeNotFound, Violation


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class NotFoundError(SchedulingError):
    """Raised when a referenced office or slot does not exist."""


class OfficeNotFoundError(NotFoundError):
    def __init__(self, office_id: str):
        self.office_id = office_id
        self.violation = OfficeNotFound(office_id)
        super().__init__(self.violation.message)


class TimeSlotNotFoundError(NotFoundError):
    def __init__(self, slot_id: str):
        self.slot_id = slot_id
        super().__init__(f'Time slot with ID "{slot_id}" not found.')


class SlotRejectedError(SchedulingError):
    """Raised when a candidate slot fails validation."""

    def __init__(self, violation: Violation):
        self.violation = violation
        super().__init__(violation.message)


class InvalidOfficeWindowError(SchedulingError):
    """Raised when an office's working window (after defaults) is empty or inverted."""

    def __init__(self, office_name: str, reason: str):
        self.office_name = office_name
        self.reason = reason
        super().__init__(f'Office "{office_name}" has an invalid working window: {reason}')


class StorageError(SchedulingError):
    """Raised when the storage layer cannot complete an operation."""


class SlotConflictError(StorageError):
    """Raised when a write is rejected by the storage exclusion constraint."""

    def __init__(self, office_id: str, slot_id: str, conflicting_slot_id: str):
        self.office_id = office_id
        self.slot_id = slot_id
        self.conflicting_slot_id = conflicting_slot_id
        super().__init__(
            f"Slot {slot_id} conflicts with stored slot {conflicting_slot_id} "
            f"for office {office_id}."
        )


def raise_for_violation(violation: Violation) -> NoReturn:
    """Convert a violation into the matching exception."""
    if isinstance(violation, OfficeNotFound):
        raise OfficeNotFoundError(violation.office_id)
    raise SlotRejectedError(violation)
