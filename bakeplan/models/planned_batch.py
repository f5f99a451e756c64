"""Planned batch model produced by the scheduler."""

from datetime import datetime
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class BatchState(str, Enum):
    """Lifecycle state of a batch in the plan."""
    PLANNED = "planned"


class PlannedBatch(BaseModel):
    """
    A batch assigned to a slot and a specific oven rack.

    Created by the capacity ledger when a reservation succeeds and never
    changed afterwards.

    Attributes:
        start: Slot-aligned bake start
        unit_id: Production unit the batch is assigned to
        rack: Rack index within the unit
        product_id: Product to bake
        quantity: Units in the batch
        state: Lifecycle state (always PLANNED for scheduler output)
    """
    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Slot-aligned bake start")
    unit_id: str = Field(..., description="Production unit ID")
    rack: int = Field(..., description="Rack index", ge=1)
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Batch quantity", gt=0)
    state: BatchState = Field(default=BatchState.PLANNED, description="Lifecycle state")

    def sort_key(self) -> Tuple[datetime, str, int]:
        """Ordering used for the published schedule."""
        return (self.start, self.unit_id, self.rack)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.start:%H:%M} | {self.unit_id} r{self.rack} | "
            f"{self.product_id} x{self.quantity} ({self.state.value})"
        )
