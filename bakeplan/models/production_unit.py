"""Production unit (oven) model."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductionUnit(BaseModel):
    """
    An oven (or similar unit) with a fixed number of parallel racks.

    Each rack holds one batch per slot, so the sum of all unit capacities
    is the number of batches that can start in a single slot.

    Attributes:
        id: Unique unit identifier
        capacity: Number of racks/lanes, numbered 1..capacity
        name: Optional display name
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Production unit identifier")
    capacity: int = Field(..., description="Number of racks", gt=0)
    name: Optional[str] = Field(None, description="Display name")

    def rack_numbers(self) -> List[int]:
        """Rack indices in first-fit order."""
        return list(range(1, self.capacity + 1))

    def has_rack(self, rack: int) -> bool:
        return 1 <= rack <= self.capacity

    def __str__(self) -> str:
        """String representation."""
        label = self.name or self.id
        return f"{label} ({self.capacity} racks)"
