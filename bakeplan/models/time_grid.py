"""Discrete time grid for slot-based bake planning.

Every planning component works on fixed-width slots aligned to local
midnight. Instants are naive local datetimes: production schedules follow
the shop clock, so no UTC conversion is ever applied.
"""

from datetime import datetime, timedelta
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


#: Width of one scheduling slot (minutes)
DEFAULT_SLOT_MINUTES = 20

#: Minutes in a calendar day; slot widths must divide it evenly
MINUTES_PER_DAY = 1440

#: Reference instant for integer slot indices
EPOCH = datetime(1970, 1, 1)


class TimeGrid(BaseModel):
    """
    Fixed-width slot grid with slot-aligned arithmetic.

    Slots are counted from local midnight, so with the default 20-minute
    width the slot boundaries are hh:00, hh:20 and hh:40.

    Attributes:
        slot_minutes: Slot width in minutes (must divide 1440)

    Example:
        grid = TimeGrid(slot_minutes=20)
        grid.floor_to_slot(datetime(2025, 10, 21, 7, 39, 59))
        # datetime(2025, 10, 21, 7, 20)
    """
    model_config = ConfigDict(frozen=True)

    slot_minutes: int = Field(
        default=DEFAULT_SLOT_MINUTES,
        description="Slot width in minutes",
        gt=0
    )

    @field_validator('slot_minutes')
    @classmethod
    def divides_day(cls, v: int) -> int:
        """Ensure slots tile a calendar day."""
        if MINUTES_PER_DAY % v != 0:
            raise ValueError(f"slot_minutes must divide {MINUTES_PER_DAY}, got {v}")
        return v

    @property
    def slot_delta(self) -> timedelta:
        """Slot width as a timedelta."""
        return timedelta(minutes=self.slot_minutes)

    @staticmethod
    def to_local(instant: datetime) -> datetime:
        """Drop tzinfo while keeping the wall-clock reading."""
        if instant.tzinfo is not None:
            return instant.replace(tzinfo=None)
        return instant

    def floor_to_slot(self, instant: datetime) -> datetime:
        """
        Truncate an instant to the slot boundary at or before it.

        Args:
            instant: Any datetime (aware datetimes keep their wall clock)

        Returns:
            Naive slot-aligned datetime
        """
        local = self.to_local(instant)
        minute_of_day = local.hour * 60 + local.minute
        floored = (minute_of_day // self.slot_minutes) * self.slot_minutes
        midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
        return midnight + timedelta(minutes=floored)

    @staticmethod
    def add_minutes(instant: datetime, minutes: float) -> datetime:
        """Exact minute arithmetic, no rounding."""
        return instant + timedelta(minutes=minutes)

    def slots_between(self, start: datetime, end: datetime) -> List[datetime]:
        """
        Slot-aligned instants from floor(start) up to but excluding end.

        Args:
            start: First instant (floored to its slot)
            end: Exclusive upper bound

        Returns:
            Ascending list of slot starts (empty if floor(start) >= end)
        """
        end = self.to_local(end)
        slots = []
        current = self.floor_to_slot(start)
        while current < end:
            slots.append(current)
            current = current + self.slot_delta
        return slots

    def is_aligned(self, instant: datetime) -> bool:
        """Check whether an instant sits exactly on a slot boundary."""
        return self.floor_to_slot(instant) == self.to_local(instant)

    @staticmethod
    def time_of_day_key(instant: datetime) -> int:
        """Minutes since local midnight; the calendar date is discarded."""
        return instant.hour * 60 + instant.minute

    def slot_index(self, instant: datetime) -> int:
        """Integer index of the slot containing instant, counted from 1970-01-01."""
        elapsed = self.floor_to_slot(instant) - EPOCH
        return int(elapsed.total_seconds() // 60) // self.slot_minutes

    def slot_from_index(self, index: int) -> datetime:
        """Slot start for an index produced by slot_index()."""
        return EPOCH + timedelta(minutes=index * self.slot_minutes)

    def __str__(self) -> str:
        """String representation."""
        return f"TimeGrid({self.slot_minutes}-minute slots)"
