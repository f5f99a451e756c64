"""Container for everything a planning run reads."""

from dataclasses import dataclass, field
from typing import List

from .history import ProductionEvent, SalesRecord
from .product import ProductSpec
from .production_unit import ProductionUnit


@dataclass
class PlanningInputs:
    """
    Catalog, topology and history bundled for a planning run.

    Attributes:
        products: Product catalog in scheduling order
        units: Production units in rack-assignment order
        sales: Historical sales records
        production_log: Historical production events
    """
    products: List[ProductSpec]
    units: List[ProductionUnit]
    sales: List[SalesRecord] = field(default_factory=list)
    production_log: List[ProductionEvent] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"PlanningInputs: {len(self.products)} products, {len(self.units)} units, "
            f"{len(self.sales)} sales records, {len(self.production_log)} production events"
        )
