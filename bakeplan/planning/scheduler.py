"""
Capacity-aware just-in-time bake scheduler.

This module converts forecast shortfalls into rack-level bake assignments.
For every slot in the horizon, and every product in catalog order, it:
1. Looks up forecast demand for the slot
2. Projects sellable stock from logged and already planned batches
3. Places batches (smallest covering size, else largest) at the latest
   feasible bake start until the shortfall is covered
4. Records an exception when no rack is free anywhere in the freshness
   window, then moves on

The pass is single and greedy: earlier slots are never revisited to
re-pack capacity for a later shortfall.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bakeplan.models.exception_record import ExceptionRecord
from bakeplan.models.history import ProductionEvent, SalesRecord
from bakeplan.models.planned_batch import PlannedBatch
from bakeplan.models.product import ProductSpec
from bakeplan.models.production_unit import ProductionUnit
from .capacity import CapacityLedger
from .config import BATCH_LIMIT_REASON, CAPACITY_EXHAUSTED_REASON, PlannerConfig
from .errors import DuplicateRackBookingError, UnknownProductError, UnknownProductionUnitError
from .forecaster import DemandForecaster
from .history import bucket_production, bucket_sales
from .inventory import InventoryProjector
from .placement import LatestFeasiblePlacement, PlacementStrategy

logger = logging.getLogger(__name__)


def choose_batch_size(shortfall: float, sizes: Iterable[int]) -> int:
    """
    Pick the batch size for a remaining shortfall.

    Args:
        shortfall: Units still uncovered (> 0)
        sizes: Allowed batch sizes

    Returns:
        Smallest size covering the shortfall, else the largest size

    Raises:
        ValueError: If no sizes are given

    Example:
        choose_batch_size(5, [6, 12])   # 6
        choose_batch_size(8, [6, 12])   # 12
        choose_batch_size(30, [6, 12])  # 12
    """
    ordered = sorted(sizes)
    if not ordered:
        raise ValueError("At least one batch size is required")
    for size in ordered:
        if size >= shortfall:
            return size
    return ordered[-1]


@dataclass
class BakePlan:
    """
    Result of one planning run.

    Attributes:
        planning_start: First slot of the horizon
        planning_end: Exclusive end of the horizon
        slots: Horizon slots, ascending
        batches: Planned batches ordered by (start, unit_id, rack)
        exceptions: Uncovered demand in the order it was detected
        forecast: product_id -> slot -> forecast demand
        utilization: slot -> (used racks, total racks)
    """
    planning_start: datetime
    planning_end: datetime
    slots: List[datetime]
    batches: List[PlannedBatch]
    exceptions: List[ExceptionRecord]
    forecast: Dict[str, Dict[datetime, float]] = field(default_factory=dict)
    utilization: Dict[datetime, Tuple[int, int]] = field(default_factory=dict)

    def is_feasible(self) -> bool:
        """True when every forecast shortfall was covered."""
        return len(self.exceptions) == 0

    @property
    def total_units(self) -> int:
        return sum(batch.quantity for batch in self.batches)

    def get_batches_for_slot(self, slot: datetime) -> List[PlannedBatch]:
        """Batches starting in a given slot."""
        return [b for b in self.batches if b.start == slot]

    def get_batches_for_product(self, product_id: str) -> List[PlannedBatch]:
        return [b for b in self.batches if b.product_id == product_id]

    def __str__(self) -> str:
        status = "FEASIBLE" if self.is_feasible() else f"SHORT ({len(self.exceptions)} exceptions)"
        return (
            f"BakePlan ({self.planning_start:%Y-%m-%d %H:%M} to {self.planning_end:%H:%M}): "
            f"{len(self.batches)} batches, {self.total_units} units - {status}"
        )


class BakeScheduler:
    """
    Rolling-horizon bake scheduler.

    History and catalog are fixed at construction. Each call to plan()
    builds a fresh capacity ledger and fresh planned-batch lists, so
    separate runs never share mutable state.

    Example:
        scheduler = BakeScheduler(products, units, sales, production_log)
        plan = scheduler.plan(now=datetime(2025, 10, 23, 5, 0), horizon_minutes=300)
        for batch in plan.batches:
            print(batch)
    """

    def __init__(
        self,
        products: Sequence[ProductSpec],
        units: Sequence[ProductionUnit],
        sales: Iterable[SalesRecord] = (),
        production_log: Iterable[ProductionEvent] = (),
        config: Optional[PlannerConfig] = None,
        placement: Optional[PlacementStrategy] = None,
    ):
        """
        Initialize scheduler and validate history against the catalog.

        Args:
            products: Product catalog in scheduling order
            units: Production units in rack-assignment order
            sales: Historical sales records
            production_log: Historical production events
            config: Planner configuration (defaults used if not provided)
            placement: Placement strategy (latest-feasible search if not provided)

        Raises:
            UnknownProductError: If a record references a product not in the catalog
            UnknownProductionUnitError: If logged production must occupy the
                ledger and references an unknown unit or rack
            DuplicateRackBookingError: If logged production must occupy the
                ledger and books one rack twice in a slot
        """
        self.config = config or PlannerConfig()
        self.grid = self.config.grid
        self.products = list(products)
        self.units = list(units)
        self.sales = list(sales)
        self.production_log = list(production_log)

        self._check_references()

        self.placement = placement or LatestFeasiblePlacement(
            self.grid, max_search_steps=self.config.max_search_steps
        )
        self.bucketed_sales = bucket_sales(self.sales, self.grid)
        self.production_lots = bucket_production(self.production_log, self.grid)
        self.projector = InventoryProjector(self.production_lots, self.grid)

    def _check_references(self) -> None:
        """Abort before scheduling if history does not match the configuration."""
        known_products = {p.id for p in self.products}

        unknown = sorted(
            {r.product_id for r in self.sales if r.product_id not in known_products}
            | {e.product_id for e in self.production_log if e.product_id not in known_products}
        )
        if unknown:
            raise UnknownProductError(
                f"History references {len(unknown)} product(s) missing from the catalog",
                context={"unknown_products": ", ".join(unknown)},
            )

        if not self.config.reserve_logged_production:
            return

        units_by_id = {u.id: u for u in self.units}
        booked = set()
        for event in self.production_log:
            unit = units_by_id.get(event.unit_id)
            if unit is None or not unit.has_rack(event.rack):
                raise UnknownProductionUnitError(
                    f"Production event references unknown rack {event.unit_id} r{event.rack}",
                    context={"event": str(event)},
                )

            key = (self.grid.floor_to_slot(event.timestamp), event.unit_id, event.rack)
            if key in booked:
                raise DuplicateRackBookingError(
                    f"Rack {event.unit_id} r{event.rack} is logged twice in slot {key[0]:%Y-%m-%d %H:%M}",
                    context={"event": str(event)},
                )
            booked.add(key)

    def _new_ledger(self) -> CapacityLedger:
        ledger = CapacityLedger(self.units)
        if self.config.reserve_logged_production:
            for event in self.production_log:
                ledger.occupy(
                    self.grid.floor_to_slot(event.timestamp),
                    event.unit_id,
                    event.rack,
                    event.product_id,
                    event.quantity,
                )
        return ledger

    def plan(self, now: datetime, horizon_minutes: Optional[int] = None) -> BakePlan:
        """
        Build a bake plan for the horizon starting at now.

        Args:
            now: Reference instant (floored to its slot)
            horizon_minutes: Horizon length; the slot exactly at
                start + horizon is included. Defaults to config.horizon_minutes.

        Returns:
            BakePlan with ordered batches and any exception records
        """
        if horizon_minutes is None:
            horizon_minutes = self.config.horizon_minutes

        start = self.grid.floor_to_slot(now)
        end = self.grid.add_minutes(start, horizon_minutes + 1)
        slots = self.grid.slots_between(start, end)

        logger.info(
            f"Planning {len(self.products)} products over {len(slots)} slots "
            f"from {start:%Y-%m-%d %H:%M}"
        )

        forecaster = DemandForecaster(self.bucketed_sales, slots, self.grid)
        ledger = self._new_ledger()
        planned: Dict[str, List[PlannedBatch]] = {p.id: [] for p in self.products}
        exceptions: List[ExceptionRecord] = []

        for slot in slots:
            for product in self.products:
                exception = self._cover_shortfall(product, slot, forecaster, ledger, planned)
                if exception is not None:
                    logger.warning(exception.message)
                    exceptions.append(exception)

        plan = BakePlan(
            planning_start=start,
            planning_end=end,
            slots=slots,
            batches=ledger.planned_batches(),
            exceptions=exceptions,
            forecast={p.id: forecaster.series(p.id) for p in self.products},
            utilization=ledger.utilization(),
        )
        logger.info(str(plan))
        return plan

    def _cover_shortfall(
        self,
        product: ProductSpec,
        slot: datetime,
        forecaster: DemandForecaster,
        ledger: CapacityLedger,
        planned: Dict[str, List[PlannedBatch]],
    ) -> Optional[ExceptionRecord]:
        """
        Place batches until the shortfall at (slot, product) is covered.

        Returns:
            An exception record when the shortfall could not be covered
        """
        demand = forecaster.demand_at(product.id, slot)
        stock = self.projector.projected_stock(
            product, slot, planned[product.id], forecaster.series(product.id)
        )
        shortfall = max(0.0, demand + self.config.safety_stock - stock)

        batches_placed = 0
        while shortfall > 0:
            if batches_placed >= self.config.max_batches_per_slot:
                return ExceptionRecord(
                    slot=slot,
                    product_id=product.id,
                    reason=BATCH_LIMIT_REASON,
                    unmet_quantity=shortfall,
                )

            size = choose_batch_size(shortfall, product.batch_sizes)
            batch = self.placement.place(ledger, product, slot, size)
            if batch is None:
                return ExceptionRecord(
                    slot=slot,
                    product_id=product.id,
                    reason=CAPACITY_EXHAUSTED_REASON,
                    unmet_quantity=shortfall,
                )

            planned[product.id].append(batch)
            batches_placed += 1
            shortfall = max(0.0, shortfall - batch.quantity)

        return None
