"""Centralized constants and run configuration for the bake planner.

Planning constants live here so the slot width, horizon and the defensive
search bounds are never hardcoded in the engine itself.
"""

from pydantic import BaseModel, Field, field_validator

from bakeplan.models.time_grid import DEFAULT_SLOT_MINUTES, MINUTES_PER_DAY, TimeGrid


# ============================================================================
# HORIZON CONSTANTS (minutes)
# ============================================================================

#: Default rolling planning horizon (5 hours)
DEFAULT_HORIZON_MINUTES = 300


# ============================================================================
# SCHEDULER CONSTANTS
# ============================================================================

#: Units added on top of forecast demand before computing the shortfall
DEFAULT_SAFETY_STOCK = 0.0

#: Upper bound on candidate bake starts examined per placement
MAX_SEARCH_STEPS = 1000

#: Upper bound on batches placed for one (slot, product) shortfall
MAX_BATCHES_PER_SLOT = 1000

#: Reason attached to exception records when no rack is free in the window
CAPACITY_EXHAUSTED_REASON = "capacity exhausted within freshness window"

#: Reason attached when the per-slot batch bound stops the shortfall loop
BATCH_LIMIT_REASON = "batch limit reached for demand slot"


class PlannerConfig(BaseModel):
    """
    Parameters for a single planning run.

    Attributes:
        slot_minutes: Width of a scheduling slot
        horizon_minutes: Default horizon used when plan() is not given one
        safety_stock: Units added to forecast demand at every slot
        max_search_steps: Cap on backward-search candidates per placement
        max_batches_per_slot: Cap on batches placed for one shortfall
        reserve_logged_production: Let logged production events occupy
            their rack in the capacity ledger before scheduling
    """
    slot_minutes: int = Field(
        default=DEFAULT_SLOT_MINUTES,
        description="Slot width in minutes",
        gt=0
    )
    horizon_minutes: int = Field(
        default=DEFAULT_HORIZON_MINUTES,
        description="Planning horizon in minutes",
        ge=0
    )
    safety_stock: float = Field(
        default=DEFAULT_SAFETY_STOCK,
        description="Safety stock added to demand",
        ge=0
    )
    max_search_steps: int = Field(
        default=MAX_SEARCH_STEPS,
        description="Maximum backward-search candidates per placement",
        gt=0
    )
    max_batches_per_slot: int = Field(
        default=MAX_BATCHES_PER_SLOT,
        description="Maximum batches placed for one shortfall",
        gt=0
    )
    reserve_logged_production: bool = Field(
        default=False,
        description="Logged production occupies ledger capacity"
    )

    @field_validator('slot_minutes')
    @classmethod
    def slot_divides_day(cls, v: int) -> int:
        """Slots must tile a day so time-of-day keys line up across dates."""
        if MINUTES_PER_DAY % v != 0:
            raise ValueError(
                f"slot_minutes must divide {MINUTES_PER_DAY}, got {v}"
            )
        return v

    @property
    def grid(self) -> TimeGrid:
        """Time grid matching this configuration."""
        return TimeGrid(slot_minutes=self.slot_minutes)
