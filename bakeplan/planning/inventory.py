"""Sellable inventory projection for slot-level planning."""

from datetime import datetime
from typing import Iterable, List, Mapping

from bakeplan.models.planned_batch import PlannedBatch
from bakeplan.models.product import ProductSpec
from bakeplan.models.time_grid import TimeGrid
from .forecaster import cumulative_forecast_before
from .history import ProductionLot


class InventoryProjector:
    """
    Projects sellable stock of a product at a given instant.

    A batch counts as sellable at an instant when its bake start lies in
    [instant - sell_window_max, instant - sell_window_min]: it has finished
    baking and cooling and has not aged out. Logged production and the
    batches planned so far in the current run both count.

    Projected stock then subtracts the forecast demand of every earlier
    slot in the horizon, since the plan is built against its own forecast
    rather than against sales that have not happened yet.
    """

    def __init__(self, production_lots: Mapping[str, List[ProductionLot]], grid: TimeGrid):
        """
        Initialize projector.

        Args:
            production_lots: Output of bucket_production()
            grid: Time grid
        """
        self.production_lots = production_lots
        self.grid = grid

    def sellable_on_hand(
        self,
        product: ProductSpec,
        instant: datetime,
        planned: Iterable[PlannedBatch] = ()
    ) -> int:
        """
        Raw sellable units at an instant, before forecast depletion.

        Args:
            product: Product to project
            instant: Point in time to evaluate
            planned: Batches planned so far (any product; others are ignored)

        Returns:
            Units from batches whose bake start is inside the sellable window
        """
        earliest = self.grid.add_minutes(instant, -product.sell_window_max)
        latest = self.grid.add_minutes(instant, -product.sell_window_min)

        units = 0
        for lot in self.production_lots.get(product.id, []):
            if earliest <= lot.slot_start <= latest:
                units += lot.quantity

        for batch in planned:
            if batch.product_id == product.id and earliest <= batch.start <= latest:
                units += batch.quantity

        return units

    def projected_stock(
        self,
        product: ProductSpec,
        instant: datetime,
        planned: Iterable[PlannedBatch],
        forecast: Mapping[datetime, float]
    ) -> float:
        """
        Sellable stock left at an instant after forecast sales of earlier slots.

        Args:
            product: Product to project
            instant: Point in time to evaluate
            planned: Batches planned so far in this run
            forecast: Forecast series of the product over the horizon

        Returns:
            max(0, sellable_on_hand - cumulative forecast before instant)
        """
        on_hand = self.sellable_on_hand(product, instant, planned)
        depleted = cumulative_forecast_before(forecast, instant)
        return max(0.0, on_hand - depleted)
