"""Historical sales and production records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SalesRecord(BaseModel):
    """
    A point-of-sale record.

    Attributes:
        timestamp: When the sale happened (local time)
        product_id: Product sold
        quantity: Units sold
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Sale timestamp")
    product_id: str = Field(..., description="Product ID")
    quantity: float = Field(..., description="Units sold", ge=0)

    def __str__(self) -> str:
        """String representation."""
        return f"{self.timestamp:%Y-%m-%d %H:%M}: {self.quantity:g} x {self.product_id} sold"


class ProductionEvent(BaseModel):
    """
    A batch that was actually baked.

    Attributes:
        timestamp: Bake start (local time)
        unit_id: Production unit used
        rack: Rack index within the unit (1-based)
        product_id: Product baked
        quantity: Units produced
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="Bake start timestamp")
    unit_id: str = Field(..., description="Production unit ID")
    rack: int = Field(..., description="Rack index", ge=1)
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Units produced", ge=0)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M}: {self.quantity} x {self.product_id} "
            f"on {self.unit_id} r{self.rack}"
        )
