"""
Input payloads for creating and updating offices and time slots.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import TIME_OF_DAY_PATTERN, DayOfWeek, parse_time_of_day


def dedupe_days(value: Optional[List[DayOfWeek]]) -> Optional[List[DayOfWeek]]:
    """Drop repeated weekdays while keeping the first occurrence order."""
    if value is None:
        return None
    seen: set[DayOfWeek] = set()
    deduped: List[DayOfWeek] = []
    for day in value:
        if day not in seen:
            deduped.append(day)
            seen.add(day)
    return deduped


def _require_ordered(start: Optional[str], end: Optional[str], what: str) -> None:
    if start is None or end is None:
        return
    if parse_time_of_day(end) <= parse_time_of_day(start):
        raise ValueError(f"{what} end time must be after its start time")


class CreateTimeSlot(BaseModel):
    """Payload for a new time slot."""
    start_time: str = Field(pattern=TIME_OF_DAY_PATTERN, description="Start time (HH:MM or HH:MM:SS)")
    end_time: str = Field(pattern=TIME_OF_DAY_PATTERN, description="End time (HH:MM or HH:MM:SS)")
    sequence: Optional[int] = Field(default=None, description="Display order, e.g. 1")

    @model_validator(mode="after")
    def validate_order(self) -> "CreateTimeSlot":
        _require_ordered(self.start_time, self.end_time, "Slot")
        return self


class UpdateTimeSlot(BaseModel):
    """Partial update of a time slot; unset fields keep their stored value."""
    start_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    sequence: Optional[int] = None

    @model_validator(mode="after")
    def validate_order(self) -> "UpdateTimeSlot":
        _require_ordered(self.start_time, self.end_time, "Slot")
        return self


class CreateOffice(BaseModel):
    """
    Payload for a new office.

    Work hours and days left unset fall back to the configured defaults.
    """
    name: str = Field(min_length=1, max_length=255)
    work_start_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    work_end_time: Optional[str] = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    working_days: Optional[List[DayOfWeek]] = None
    time_slots: List[CreateTimeSlot] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: Optional[List[DayOfWeek]]) -> Optional[List[DayOfWeek]]:
        return dedupe_days(value)

    @model_validator(mode="after")
    def validate_hours_order(self) -> "CreateOffice":
        _require_ordered(self.work_start_time, self.work_end_time, "Working window")
        return self
