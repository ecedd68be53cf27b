"""
Application service for offices and their working windows.
"""

from __future__ import annotations

import logging
from typing import List, Sequence
from uuid import uuid4

from ..config import DefaultsConfig
from ..domain.exceptions import InvalidOfficeWindowError, OfficeNotFoundError, SlotRejectedError
from ..domain.models import Interval, OfficeWindow, TimeSlot, window_boundary_violation
from ..domain.repositories import OfficeRepository, TimeSlotRepository
from ..domain.slot_validator import find_overlap
from ..domain.violations import InvalidInterval, OutsideWorkingHours, OverlapsExistingSlot
from ..schemas import CreateOffice, CreateTimeSlot
from .locks import OfficeLocks


logger = logging.getLogger(__name__)


class OfficeService:
    """
    Creates, looks up and removes offices.

    Removing an office cascades to its slots.
    """

    def __init__(
        self,
        office_repository: OfficeRepository,
        time_slot_repository: TimeSlotRepository,
        defaults: DefaultsConfig | None = None,
        locks: OfficeLocks | None = None,
    ) -> None:
        self._office_repository = office_repository
        self._time_slot_repository = time_slot_repository
        self._defaults = defaults or DefaultsConfig()
        self._locks = locks or OfficeLocks()

    async def create(self, data: CreateOffice) -> OfficeWindow:
        """
        Create an office, optionally with its initial slots.

        The initial slots are validated as one batch against the window and
        against each other; if any is rejected nothing is stored.

        Raises:
            InvalidOfficeWindowError: If the resulting working window is empty
            SlotRejectedError: If an initial slot is invalid
        """
        try:
            work_interval = Interval.parse(
                data.work_start_time or self._defaults.work_start_time,
                data.work_end_time or self._defaults.work_end_time,
            )
        except ValueError as exc:
            logger.warning("Rejected office %s: %s", data.name, exc)
            raise InvalidOfficeWindowError(data.name, str(exc)) from exc

        working_days = data.working_days if data.working_days is not None else self._defaults.working_days

        office = OfficeWindow(
            id=str(uuid4()),
            name=data.name,
            work_interval=work_interval,
            working_days=frozenset(working_days),
        )
        slots = self._stage_initial_slots(office, data.time_slots)

        await self._office_repository.add(office)
        for slot in slots:
            await self._time_slot_repository.save(slot)

        logger.info("Created office %s (%s) %s with %d slots", office.name, office.id, work_interval, len(slots))
        return office

    @staticmethod
    def _stage_initial_slots(office: OfficeWindow, payloads: Sequence[CreateTimeSlot]) -> List[TimeSlot]:
        staged: List[TimeSlot] = []

        for payload in payloads:
            try:
                interval = Interval.parse(payload.start_time, payload.end_time)
            except ValueError as exc:
                raise SlotRejectedError(
                    InvalidInterval(start=payload.start_time, end=payload.end_time, reason=str(exc))
                ) from exc

            bound = window_boundary_violation(office, interval)
            if bound is not None:
                raise SlotRejectedError(
                    OutsideWorkingHours(bound=bound, candidate=interval, window=office.work_interval)
                )

            conflict = find_overlap(interval, staged)
            if conflict is not None:
                raise SlotRejectedError(OverlapsExistingSlot(slot_id=conflict.id, interval=conflict.interval))

            staged.append(
                TimeSlot(
                    id=str(uuid4()),
                    office_id=office.id,
                    interval=interval,
                    sequence=payload.sequence,
                )
            )

        return staged

    async def get(self, office_id: str) -> OfficeWindow:
        office = await self._office_repository.get_by_id(office_id)
        if office is None:
            raise OfficeNotFoundError(office_id)
        return office

    async def list(self) -> List[OfficeWindow]:
        return await self._office_repository.list_all()

    async def resolve(self, identifier: str) -> OfficeWindow:
        """
        Resolve an office identifier (ID or name) to an office.

        Raises:
            OfficeNotFoundError: If identifier cannot be resolved
        """
        office = await self._office_repository.get_by_id(identifier)
        if office is not None:
            return office

        for candidate in await self._office_repository.list_all():
            if candidate.name.lower() == identifier.lower():
                return candidate

        raise OfficeNotFoundError(identifier)

    async def remove(self, office_id: str) -> int:
        """Delete an office and its slots; return the number of slots deleted."""
        await self.get(office_id)
        async with self._locks.for_office(office_id):
            deleted_count = await self._time_slot_repository.delete_by_office(office_id)
            await self._office_repository.delete(office_id)
        logger.info("Deleted office %s and %d time slots", office_id, deleted_count)
        return deleted_count
