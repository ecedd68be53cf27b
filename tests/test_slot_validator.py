"""
Tests for the slot validator.
"""

import asyncio
from typing import List, Optional

from officeslots.domain.models import (
    DayOfWeek,
    Interval,
    OfficeWindow,
    TimeSlot,
    WindowBound,
)
from officeslots.domain.slot_validator import SlotValidator, find_overlap
from officeslots.domain.violations import (
    InvalidInterval,
    OfficeNotFound,
    OutsideWorkingHours,
    OverlapsExistingSlot,
)


OFFICE_ID = "office-1"


class StubOfficeRepository:
    """Minimal stub matching OfficeRepository."""

    def __init__(self, offices: List[OfficeWindow]):
        self._offices = {office.id: office for office in offices}
        self.calls: List[str] = []

    async def get_by_id(self, office_id):
        self.calls.append(office_id)
        return self._offices.get(office_id)


class StubTimeSlotRepository:
    """Minimal stub matching TimeSlotRepository.list_by_office."""

    def __init__(self, slots: List[TimeSlot]):
        self._slots = slots
        self.calls: List[dict] = []

    async def list_by_office(self, office_id, exclude_id=None):
        self.calls.append({"office_id": office_id, "exclude_id": exclude_id})
        return sorted(
            (s for s in self._slots if s.office_id == office_id and s.id != exclude_id),
            key=lambda s: s.start_time,
        )


def _slot(slot_id: str, start: str, end: str, office_id: str = OFFICE_ID) -> TimeSlot:
    return TimeSlot(id=slot_id, office_id=office_id, interval=Interval.parse(start, end))


def _build_validator(slots: Optional[List[TimeSlot]] = None):
    office = OfficeWindow(
        id=OFFICE_ID,
        name="Room A",
        work_interval=Interval.parse("09:00:00", "17:00:00"),
        working_days=frozenset({DayOfWeek.MONDAY}),
    )
    offices = StubOfficeRepository([office])
    time_slots = StubTimeSlotRepository(slots or [])
    return SlotValidator(offices, time_slots), offices, time_slots


def _validate(validator, start, end, office_id=OFFICE_ID, exclude_slot_id=None):
    return asyncio.run(
        validator.validate_and_stage(office_id, start, end, exclude_slot_id=exclude_slot_id)
    )


class TestScenarios:
    """The reference scenarios for an office open 09:00-17:00."""

    def test_empty_office_accepts_slot(self):
        """Scenario 1: no existing slots, candidate 09:00-10:00 is accepted."""
        validator, _, _ = _build_validator()

        result = _validate(validator, "09:00:00", "10:00:00")

        assert result.accepted
        assert result.violation is None
        assert result.interval == Interval.parse("09:00", "10:00")

    def test_overlapping_slot_rejected(self):
        """Scenario 2: 09:30-10:30 overlaps existing 09:00-10:00."""
        existing = _slot("existing", "09:00:00", "10:00:00")
        validator, _, _ = _build_validator([existing])

        result = _validate(validator, "09:30:00", "10:30:00")

        assert not result.accepted
        assert result.violation == OverlapsExistingSlot(slot_id="existing", interval=existing.interval)

    def test_start_before_open_rejected(self):
        """Scenario 3: 08:00-09:00 starts before opening."""
        validator, _, _ = _build_validator()

        result = _validate(validator, "08:00:00", "09:00:00")

        assert isinstance(result.violation, OutsideWorkingHours)
        assert result.violation.bound is WindowBound.START_BEFORE_OPEN
        assert "08:00:00" in result.violation.message

    def test_end_after_close_rejected(self):
        """Scenario 4: 16:00-18:00 ends after closing."""
        validator, _, _ = _build_validator()

        result = _validate(validator, "16:00:00", "18:00:00")

        assert isinstance(result.violation, OutsideWorkingHours)
        assert result.violation.bound is WindowBound.END_AFTER_CLOSE
        assert "18:00:00" in result.violation.message

    def test_unknown_office_rejected_before_interval_logic(self):
        """Scenario 5: unknown office fails even with a malformed interval, without a slot scan."""
        validator, _, time_slots = _build_validator()

        result = _validate(validator, "18:00", "08:00", office_id="missing")

        assert result.violation == OfficeNotFound("missing")
        assert time_slots.calls == []


class TestSlotValidator:
    """Tests for SlotValidator edge cases."""

    def test_back_to_back_slots_accepted(self):
        """Test adjacency on either side of an existing slot is allowed."""
        validator, _, _ = _build_validator([_slot("existing", "10:00:00", "11:00:00")])

        assert _validate(validator, "09:00:00", "10:00:00").accepted
        assert _validate(validator, "11:00:00", "12:00:00").accepted

    def test_exact_window_accepted(self):
        """Test a candidate equal to the full window is accepted."""
        validator, _, _ = _build_validator()

        assert _validate(validator, "09:00:00", "17:00:00").accepted

    def test_one_second_outside_rejected(self):
        """Test exceeding either window bound by one second is rejected."""
        validator, _, _ = _build_validator()

        before = _validate(validator, "08:59:59", "17:00:00")
        after = _validate(validator, "09:00:00", "17:00:01")

        assert before.violation.bound is WindowBound.START_BEFORE_OPEN
        assert after.violation.bound is WindowBound.END_AFTER_CLOSE

    def test_invalid_interval_rejected(self):
        """Test inverted, zero-length and malformed intervals."""
        validator, _, time_slots = _build_validator()

        for start, end in [("11:00", "10:00"), ("10:00", "10:00:00"), ("10:00", "25:00")]:
            result = _validate(validator, start, end)
            assert isinstance(result.violation, InvalidInterval)

        assert time_slots.calls == []

    def test_excluding_self_on_update(self):
        """Test a slot keeping its own interval does not overlap itself."""
        existing = _slot("slot-x", "10:00:00", "11:00:00")
        validator, _, time_slots = _build_validator([existing])

        result = _validate(validator, "10:00:00", "11:00:00", exclude_slot_id="slot-x")

        assert result.accepted
        assert time_slots.calls == [{"office_id": OFFICE_ID, "exclude_id": "slot-x"}]

    def test_exclusion_only_skips_named_slot(self):
        """Test excluding one slot still detects overlap with another."""
        validator, _, _ = _build_validator([
            _slot("slot-x", "10:00:00", "11:00:00"),
            _slot("slot-y", "11:00:00", "12:00:00"),
        ])

        result = _validate(validator, "10:30:00", "11:30:00", exclude_slot_id="slot-x")

        assert result.violation.slot_id == "slot-y"

    def test_slots_of_other_offices_ignored(self):
        """Test overlap is only checked within the same office."""
        validator, _, _ = _build_validator([_slot("elsewhere", "09:00", "10:00", office_id="office-2")])

        assert _validate(validator, "09:00", "10:00").accepted

    def test_reports_earliest_conflict(self):
        """Test the first overlapping sibling by start time is reported."""
        validator, _, _ = _build_validator([
            _slot("late", "11:00", "12:00"),
            _slot("early", "09:00", "10:00"),
        ])

        result = _validate(validator, "09:30", "11:30")

        assert result.violation.slot_id == "early"

    def test_idempotent(self):
        """Test repeated validation against unchanged state gives the same result."""
        validator, _, _ = _build_validator([_slot("existing", "09:00", "10:00")])

        assert _validate(validator, "09:30", "10:30") == _validate(validator, "09:30", "10:30")
        assert _validate(validator, "10:00", "11:00") == _validate(validator, "10:00", "11:00")

    def test_non_overlapping_pairs_accepted_independently(self):
        """Test no false positives across a spread of disjoint intervals."""
        validator, _, _ = _build_validator([_slot("existing", "12:00", "13:00")])

        for start, end in [("09:00", "12:00"), ("13:00", "17:00"), ("09:00", "09:00:01"), ("16:59:59", "17:00")]:
            assert _validate(validator, start, end).accepted

    def test_accepts_time_objects(self):
        """Test candidate bounds may be passed as parsed times."""
        validator, _, _ = _build_validator()
        interval = Interval.parse("09:15", "09:45")

        assert _validate(validator, interval.start, interval.end).interval == interval


class TestFindOverlap:
    """Tests for the pure overlap scan."""

    def test_no_siblings(self):
        """Test an empty sibling list has no overlap."""
        assert find_overlap(Interval.parse("09:00", "10:00"), []) is None

    def test_touching_sibling_not_reported(self):
        """Test adjacency is not reported while a true overlap is."""
        touching = _slot("touching", "10:30", "11:00")
        overlapping = _slot("overlapping", "09:00", "10:00")
        candidate = Interval.parse("09:30", "10:30")

        assert find_overlap(candidate, [touching]) is None
        assert find_overlap(candidate, [touching, overlapping]) is overlapping
