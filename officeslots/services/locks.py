"""
Per-office locks shared by the services.

Every write that touches an office's slots (create, update, remove, the
office cascade) runs under the same lock for that office.
"""

import asyncio
from typing import Dict


class OfficeLocks:
    """Lazily created ``asyncio.Lock`` per office ID."""

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def for_office(self, office_id: str) -> asyncio.Lock:
        if office_id not in self._locks:
            self._locks[office_id] = asyncio.Lock()
        return self._locks[office_id]
