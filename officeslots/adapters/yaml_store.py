"""
Build an in-memory office store from the YAML configuration.
"""

from dataclasses import dataclass

from ..config import AppConfig
from ..services.locks import OfficeLocks
from ..services.offices import OfficeService
from ..services.time_slots import TimeSlotService
from .memory import InMemoryOfficeRepository, InMemoryTimeSlotRepository


@dataclass
class OfficeStore:
    """Repositories plus the services wired on top of them."""
    offices: InMemoryOfficeRepository
    time_slots: InMemoryTimeSlotRepository
    office_service: OfficeService
    time_slot_service: TimeSlotService


def build_store(config: AppConfig) -> OfficeStore:
    office_repository = InMemoryOfficeRepository()
    time_slot_repository = InMemoryTimeSlotRepository()
    locks = OfficeLocks()
    return OfficeStore(
        offices=office_repository,
        time_slots=time_slot_repository,
        office_service=OfficeService(
            office_repository, time_slot_repository, defaults=config.defaults, locks=locks
        ),
        time_slot_service=TimeSlotService(office_repository, time_slot_repository, locks=locks),
    )


async def load_store(config: AppConfig) -> OfficeStore:
    """
    Create the configured offices (and their slots) in a fresh store.

    Raises:
        InvalidOfficeWindowError: If a configured office has an empty window
        SlotRejectedError: If a configured slot breaks an office's rules
    """
    store = build_store(config)
    for office in config.offices:
        await store.office_service.create(office)
    return store
