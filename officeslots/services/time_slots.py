"""
Application service for managing an office's time slots.

The service coordinates the ``SlotValidator`` with the slot repository. It
turns typed validation results into exceptions for the caller and does the
logging the validator leaves out. Every write is serialized per office
through ``OfficeLocks``; the repository's write-time constraint backs that up.
"""

from __future__ import annotations

import logging
from typing import List
from uuid import uuid4

import pendulum

from ..domain.exceptions import (
    OfficeNotFoundError,
    SlotConflictError,
    TimeSlotNotFoundError,
    raise_for_violation,
)
from ..domain.models import Interval, TimeSlot, format_time_of_day
from ..domain.repositories import OfficeRepository, TimeSlotRepository
from ..domain.slot_validator import SlotValidator, ValidationResult
from ..schemas import CreateTimeSlot, UpdateTimeSlot
from .locks import OfficeLocks


logger = logging.getLogger(__name__)


class TimeSlotService:
    """
    Create, read, update and delete time slots behind the slot validator.
    """

    def __init__(
        self,
        office_repository: OfficeRepository,
        time_slot_repository: TimeSlotRepository,
        validator: SlotValidator | None = None,
        locks: OfficeLocks | None = None,
    ) -> None:
        self._office_repository = office_repository
        self._time_slot_repository = time_slot_repository
        self._validator = validator or SlotValidator(office_repository, time_slot_repository)
        self._locks = locks or OfficeLocks()

    @property
    def validator(self) -> SlotValidator:
        return self._validator

    async def _ensure_office(self, office_id: str) -> None:
        if await self._office_repository.get_by_id(office_id) is None:
            logger.warning("Time slot operation on unknown office %s", office_id)
            raise OfficeNotFoundError(office_id)

    async def _validate(
        self,
        office_id: str,
        start: str,
        end: str,
        exclude_slot_id: str | None = None,
    ) -> Interval:
        logger.debug(
            "Validating slot %s-%s for office %s, excluding %s",
            start,
            end,
            office_id,
            exclude_slot_id or "none",
        )
        result: ValidationResult = await self._validator.validate_and_stage(
            office_id, start, end, exclude_slot_id=exclude_slot_id
        )
        if not result.accepted:
            logger.warning("Rejected slot %s-%s for office %s: %s", start, end, office_id, result.violation.message)
            raise_for_violation(result.violation)

        logger.debug("Slot %s accepted for office %s", result.interval, office_id)
        return result.interval

    async def _store(self, slot: TimeSlot, replace: bool = False) -> TimeSlot:
        try:
            if replace:
                return await self._time_slot_repository.replace(slot)
            return await self._time_slot_repository.save(slot)
        except SlotConflictError as exc:
            logger.warning("Storage rejected slot %s: %s", slot.id, exc)
            raise

    async def create(self, office_id: str, data: CreateTimeSlot) -> TimeSlot:
        """
        Validate and store a new slot.

        Raises:
            OfficeNotFoundError: If the office does not exist
            SlotRejectedError: If the slot is malformed, outside hours or overlapping
            SlotConflictError: If storage rejects the write
        """
        async with self._locks.for_office(office_id):
            interval = await self._validate(office_id, data.start_time, data.end_time)
            slot = TimeSlot(
                id=str(uuid4()),
                office_id=office_id,
                interval=interval,
                sequence=data.sequence,
            )
            logger.info("Creating time slot for office %s: %s", office_id, interval)
            return await self._store(slot)

    async def list_for_office(self, office_id: str) -> List[TimeSlot]:
        """Return an office's slots ordered by start time."""
        await self._ensure_office(office_id)
        return await self._time_slot_repository.list_by_office(office_id)

    async def get(self, slot_id: str) -> TimeSlot:
        slot = await self._time_slot_repository.get_by_id(slot_id)
        if slot is None:
            raise TimeSlotNotFoundError(slot_id)
        return slot

    async def update(self, slot_id: str, data: UpdateTimeSlot) -> TimeSlot:
        """
        Apply a partial update and re-validate the resulting slot.

        The slot itself is excluded from the overlap scan, so keeping the
        same interval is always accepted. The slot is re-read under the
        office lock; a slot removed in the meantime is not recreated.

        Raises:
            TimeSlotNotFoundError: If the slot does not exist (any more)
        """
        office_id = (await self.get(slot_id)).office_id
        changes = data.model_dump(exclude_unset=True)

        async with self._locks.for_office(office_id):
            existing = await self.get(slot_id)
            start = changes.get("start_time") or format_time_of_day(existing.start_time)
            end = changes.get("end_time") or format_time_of_day(existing.end_time)

            interval = await self._validate(office_id, start, end, exclude_slot_id=slot_id)
            existing.interval = interval
            if "sequence" in changes:
                existing.sequence = changes["sequence"]
            existing.updated_at = pendulum.now("UTC")
            logger.info("Updating time slot %s to %s", slot_id, interval)
            return await self._store(existing, replace=True)

    async def remove(self, slot_id: str) -> None:
        slot = await self.get(slot_id)
        async with self._locks.for_office(slot.office_id):
            if not await self._time_slot_repository.delete(slot.id):
                raise TimeSlotNotFoundError(slot_id)
        logger.info("Time slot %s deleted", slot_id)

    async def remove_all_for_office(self, office_id: str) -> int:
        """Delete every slot of an office; return the number deleted."""
        await self._ensure_office(office_id)
        async with self._locks.for_office(office_id):
            deleted_count = await self._time_slot_repository.delete_by_office(office_id)
        logger.info("Deleted %d time slots for office %s", deleted_count, office_id)
        return deleted_count
