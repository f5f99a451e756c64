"""Placement strategies that turn a batch request into a rack reservation.

The scheduler only talks to PlacementStrategy, so the greedy backward
search can be swapped for a different packer without touching the
shortfall loop.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from bakeplan.models.planned_batch import PlannedBatch
from bakeplan.models.product import ProductSpec
from bakeplan.models.time_grid import TimeGrid
from .capacity import CapacityLedger
from .config import MAX_SEARCH_STEPS

logger = logging.getLogger(__name__)


class PlacementStrategy(ABC):
    """
    Abstract placement policy.

    Subclasses must implement place(), reserving capacity in the ledger for
    one batch that serves demand at demand_slot, or return None when no
    legal bake start has a free rack.
    """

    @abstractmethod
    def place(
        self,
        ledger: CapacityLedger,
        product: ProductSpec,
        demand_slot: datetime,
        quantity: int
    ) -> Optional[PlannedBatch]:
        """
        Reserve capacity for one batch.

        Args:
            ledger: Capacity ledger of the current run
            product: Product to bake
            demand_slot: Slot whose demand the batch must serve
            quantity: Batch size

        Returns:
            The planned batch, or None when placement is infeasible
        """
        raise NotImplementedError("Subclass must implement place()")


class LatestFeasiblePlacement(PlacementStrategy):
    """
    Greedy just-in-time placement.

    Candidates run backward one slot at a time from the just-in-time start
    (demand_slot - bake - cool, floored to the grid) to the earliest start
    whose batch is still sellable at demand_slot (demand_slot -
    sell_window_max). The first candidate with a free rack wins, so the
    latest feasible start is always chosen.
    """

    def __init__(self, grid: TimeGrid, max_search_steps: int = MAX_SEARCH_STEPS):
        """
        Initialize placement.

        Args:
            grid: Time grid defining the step size
            max_search_steps: Cap on candidates examined per placement
        """
        self.grid = grid
        self.max_search_steps = max_search_steps

    def candidate_starts(self, product: ProductSpec, demand_slot: datetime) -> List[datetime]:
        """
        Bake starts to try, latest first.

        Args:
            product: Product to bake
            demand_slot: Slot whose demand the batch must serve

        Returns:
            Slot-aligned starts from the JIT target down to the earliest
            permissible start (inclusive), at most max_search_steps long
        """
        target = self.grid.floor_to_slot(
            self.grid.add_minutes(demand_slot, -product.ready_minutes)
        )
        earliest = self.grid.add_minutes(demand_slot, -product.sell_window_max)

        candidates = []
        current = target
        while current >= earliest and len(candidates) < self.max_search_steps:
            candidates.append(current)
            current = current - self.grid.slot_delta
        return candidates

    def place(
        self,
        ledger: CapacityLedger,
        product: ProductSpec,
        demand_slot: datetime,
        quantity: int
    ) -> Optional[PlannedBatch]:
        for start in self.candidate_starts(product, demand_slot):
            if ledger.is_full(start):
                continue
            batch = ledger.reserve(start, product.id, quantity)
            if batch is not None:
                logger.debug(
                    f"Placed {product.id} x{quantity} at {start:%Y-%m-%d %H:%M} "
                    f"on {batch.unit_id} r{batch.rack} for demand at {demand_slot:%H:%M}"
                )
                return batch
        return None
