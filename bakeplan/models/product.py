"""Product catalog model with batch sizes and freshness window."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProductSpec(BaseModel):
    """
    A bakeable product and the rules that govern its freshness.

    Freshness is measured in minutes since bake start. A batch is sellable
    from the moment it has finished baking and cooling until the end of
    its sell window.

    Business Rules:
    - sell_window_min always equals bake_minutes + cool_minutes. It is
      derived when omitted and rejected when supplied with another value.
    - sell_window_max must be strictly greater than sell_window_min
    - perish_minutes (when given) cannot end before the sell window does

    Attributes:
        id: Unique product identifier (SKU)
        name: Display name
        batch_sizes: Allowed batch quantities, ascending and de-duplicated
        bake_minutes: Time in the oven
        cool_minutes: Time on the cooling rack before sale
        sell_window_min: First sellable minute after bake start
        sell_window_max: End (exclusive) of the sellable window
        perish_minutes: Minutes after bake start before the product is waste
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Product identifier")
    name: str = Field(..., description="Product display name")
    batch_sizes: List[int] = Field(..., min_length=1, description="Allowed batch sizes")
    bake_minutes: int = Field(..., description="Bake duration in minutes", ge=0)
    cool_minutes: int = Field(..., description="Cool duration in minutes", ge=0)
    sell_window_min: Optional[int] = Field(
        None,
        description="Sellable from this many minutes after bake start (defaults to bake + cool)",
        ge=0
    )
    sell_window_max: int = Field(
        ...,
        description="Sellable until this many minutes after bake start (exclusive)",
        gt=0
    )
    perish_minutes: Optional[int] = Field(
        None,
        description="Minutes after bake start before the product perishes",
        gt=0
    )

    @field_validator('id')
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        """Reject whitespace-only identifiers."""
        if not v.strip():
            raise ValueError("Product id cannot be whitespace only")
        return v.strip()

    @field_validator('batch_sizes')
    @classmethod
    def positive_sorted_sizes(cls, v: List[int]) -> List[int]:
        """Batch sizes must be positive; store them ascending without duplicates."""
        for size in v:
            if size <= 0:
                raise ValueError(f"Batch sizes must be positive, got {size}")
        return sorted(set(v))

    @model_validator(mode='after')
    def validate_sell_window(self):
        """Derive or check the freshness lower bound and order the window."""
        ready = self.bake_minutes + self.cool_minutes
        if self.sell_window_min is None:
            object.__setattr__(self, 'sell_window_min', ready)
        elif self.sell_window_min != ready:
            raise ValueError(
                f"sell_window_min ({self.sell_window_min}) must equal "
                f"bake_minutes + cool_minutes ({ready}) for product {self.id}"
            )

        if self.sell_window_max <= self.sell_window_min:
            raise ValueError(
                f"sell_window_max ({self.sell_window_max}) must be greater than "
                f"sell_window_min ({self.sell_window_min}) for product {self.id}"
            )

        if self.perish_minutes is not None and self.perish_minutes < self.sell_window_max:
            raise ValueError(
                f"perish_minutes ({self.perish_minutes}) cannot be shorter than "
                f"sell_window_max ({self.sell_window_max}) for product {self.id}"
            )
        return self

    @property
    def ready_minutes(self) -> int:
        """Minutes from bake start until the batch can be sold."""
        return self.bake_minutes + self.cool_minutes

    @property
    def min_batch_size(self) -> int:
        return self.batch_sizes[0]

    @property
    def max_batch_size(self) -> int:
        return self.batch_sizes[-1]

    def is_sellable_after(self, minutes_since_bake_start: float) -> bool:
        """
        Check if a batch is sellable a given number of minutes after bake start.

        This is the per-batch freshness rule. InventoryProjector counts stock
        on slot boundaries instead and includes a batch whose age is exactly
        sell_window_max, so a batch baked sell_window_max minutes before a
        demand slot still covers that slot.

        Args:
            minutes_since_bake_start: Elapsed minutes since the batch went in

        Returns:
            True inside [sell_window_min, sell_window_max)
        """
        return self.sell_window_min <= minutes_since_bake_start < self.sell_window_max

    def __str__(self) -> str:
        """String representation."""
        sizes = "/".join(str(s) for s in self.batch_sizes)
        return (
            f"{self.name} ({self.id}) - batches {sizes}, "
            f"sellable {self.sell_window_min}-{self.sell_window_max} min"
        )
