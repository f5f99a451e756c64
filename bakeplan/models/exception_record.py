"""Exception records for demand the plan could not cover."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ExceptionRecord(BaseModel):
    """
    Demand at a slot that could not be covered within capacity and freshness.

    Attributes:
        slot: Demand slot that is left short
        product_id: Affected product
        reason: Machine-friendly reason
        unmet_quantity: Shortfall still open when the scheduler gave up
    """
    model_config = ConfigDict(frozen=True)

    slot: datetime = Field(..., description="Demand slot")
    product_id: str = Field(..., description="Product ID")
    reason: str = Field(..., description="Why the demand was not covered")
    unmet_quantity: float = Field(default=0.0, description="Remaining shortfall", ge=0)

    @property
    def message(self) -> str:
        """Human-readable line for planners and floor staff."""
        return (
            f"Cannot meet demand for {self.product_id} at {self.slot:%Y-%m-%d %H:%M}: "
            f"{self.reason} ({self.unmet_quantity:g} units short)"
        )

    def __str__(self) -> str:
        return self.message
