"""
Storage capabilities consumed by the validator and the services.

Implementations decide the persistence technology. The hard requirements
beyond the signatures below are that ``TimeSlotRepository.save``
rejects a slot overlapping a stored sibling of the same office atomically at
write time, raising ``SlotConflictError``, and that ``replace`` never
recreates a slot that was deleted.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .models import OfficeWindow, TimeSlot


class OfficeRepository(Protocol):
    """Protocol describing office storage."""

    async def get_by_id(self, office_id: str) -> Optional[OfficeWindow]:
        """Return the office or None if it does not exist."""

    async def list_all(self) -> List[OfficeWindow]:
        """Return all offices ordered by name."""

    async def add(self, office: OfficeWindow) -> OfficeWindow:
        """Store a new office."""

    async def delete(self, office_id: str) -> bool:
        """Delete an office; return False if it did not exist."""


class TimeSlotRepository(Protocol):
    """Protocol describing time slot storage."""

    async def list_by_office(
        self,
        office_id: str,
        exclude_id: Optional[str] = None,
    ) -> List[TimeSlot]:
        """Return the office's slots ordered by start time ascending."""

    async def get_by_id(self, slot_id: str) -> Optional[TimeSlot]:
        """Return the slot or None if it does not exist."""

    async def save(self, slot: TimeSlot) -> TimeSlot:
        """Insert or replace a slot, enforcing the no-overlap constraint."""

    async def replace(self, slot: TimeSlot) -> TimeSlot:
        """
        Overwrite a stored slot, enforcing the no-overlap constraint.

        Raises ``TimeSlotNotFoundError`` if the slot is no longer stored.
        """

    async def delete(self, slot_id: str) -> bool:
        """Delete a slot; return False if it did not exist."""

    async def delete_by_office(self, office_id: str) -> int:
        """Delete every slot of an office and return how many were removed."""
