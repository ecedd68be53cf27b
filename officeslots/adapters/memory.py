"""
In-memory repositories for offices and time slots.

Used by the CLI and the test suite in place of a database. Reads return
copies so callers always work on a snapshot.
"""

import asyncio
import dataclasses
from typing import Dict, List, Optional

from ..domain.exceptions import SlotConflictError, TimeSlotNotFoundError
from ..domain.models import OfficeWindow, TimeSlot
from ..domain.slot_validator import find_overlap


class InMemoryOfficeRepository:
    """Dictionary-backed office storage."""

    def __init__(self) -> None:
        self._offices: Dict[str, OfficeWindow] = {}

    async def get_by_id(self, office_id: str) -> Optional[OfficeWindow]:
        return self._offices.get(office_id)

    async def list_all(self) -> List[OfficeWindow]:
        return sorted(self._offices.values(), key=lambda office: office.name.lower())

    async def add(self, office: OfficeWindow) -> OfficeWindow:
        self._offices[office.id] = office
        return office

    async def delete(self, office_id: str) -> bool:
        return self._offices.pop(office_id, None) is not None


class InMemoryTimeSlotRepository:
    """
    Dictionary-backed slot storage with a per-office exclusion constraint.

    ``save`` re-checks overlap against stored siblings while holding the
    office lock, so two writers that both passed validation cannot both land.
    """

    def __init__(self) -> None:
        self._slots: Dict[str, TimeSlot] = {}
        self._write_locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, office_id: str) -> asyncio.Lock:
        if office_id not in self._write_locks:
            self._write_locks[office_id] = asyncio.Lock()
        return self._write_locks[office_id]

    async def list_by_office(
        self,
        office_id: str,
        exclude_id: Optional[str] = None,
    ) -> List[TimeSlot]:
        # Yield like a real driver would, so concurrent callers interleave here.
        await asyncio.sleep(0)
        slots = [
            dataclasses.replace(slot)
            for slot in self._slots.values()
            if slot.office_id == office_id and slot.id != exclude_id
        ]
        return sorted(slots, key=lambda slot: slot.start_time)

    async def get_by_id(self, slot_id: str) -> Optional[TimeSlot]:
        slot = self._slots.get(slot_id)
        return dataclasses.replace(slot) if slot else None

    def _write(self, slot: TimeSlot) -> None:
        siblings = [
            stored
            for stored in self._slots.values()
            if stored.office_id == slot.office_id and stored.id != slot.id
        ]
        conflict = find_overlap(slot.interval, siblings)
        if conflict is not None:
            raise SlotConflictError(
                office_id=slot.office_id,
                slot_id=slot.id,
                conflicting_slot_id=conflict.id,
            )
        self._slots[slot.id] = dataclasses.replace(slot)

    async def save(self, slot: TimeSlot) -> TimeSlot:
        async with self._lock_for(slot.office_id):
            self._write(slot)
        return slot

    async def replace(self, slot: TimeSlot) -> TimeSlot:
        async with self._lock_for(slot.office_id):
            stored = self._slots.get(slot.id)
            if stored is None or stored.office_id != slot.office_id:
                raise TimeSlotNotFoundError(slot.id)
            self._write(slot)
        return slot

    async def delete(self, slot_id: str) -> bool:
        return self._slots.pop(slot_id, None) is not None

    async def delete_by_office(self, office_id: str) -> int:
        async with self._lock_for(office_id):
            doomed = [slot_id for slot_id, slot in self._slots.items() if slot.office_id == office_id]
            for slot_id in doomed:
                del self._slots[slot_id]
        return len(doomed)
