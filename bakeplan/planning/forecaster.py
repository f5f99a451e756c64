"""Seasonal-naive demand forecasting by time of day.

The forecast for a slot is the plain average of every historical slot
total that shares its time of day (e.g. all 07:20 slots), whatever the
calendar date. Days are weighted equally and no smoothing is applied.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Mapping, Sequence

from bakeplan.models.time_grid import TimeGrid

logger = logging.getLogger(__name__)


def forecast_demand(
    product_id: str,
    slots: Sequence[datetime],
    bucketed_sales: Mapping[str, Mapping[datetime, float]],
    grid: TimeGrid
) -> Dict[datetime, float]:
    """
    Estimate demand per slot for one product.

    Args:
        product_id: Product to forecast
        slots: Slot-aligned instants to forecast
        bucketed_sales: Output of bucket_sales()
        grid: Time grid providing time-of-day keys

    Returns:
        slot -> mean historical quantity at that time of day (0.0 if none)
    """
    history = bucketed_sales.get(product_id, {})

    by_time_of_day: Dict[int, List[float]] = defaultdict(list)
    for slot, quantity in history.items():
        by_time_of_day[grid.time_of_day_key(slot)].append(quantity)

    result: Dict[datetime, float] = {}
    for slot in slots:
        samples = by_time_of_day.get(grid.time_of_day_key(slot), [])
        result[slot] = sum(samples) / len(samples) if samples else 0.0
    return result


def cumulative_forecast_before(forecast: Mapping[datetime, float], instant: datetime) -> float:
    """Total forecast demand of all slots strictly before instant."""
    return sum(quantity for slot, quantity in forecast.items() if slot < instant)


class DemandForecaster:
    """
    Forecasts demand for a catalog over one planning horizon.

    Series are computed once per product and reused, so the scheduler can
    ask for demand and cumulative demand repeatedly without rescanning
    history.
    """

    def __init__(
        self,
        bucketed_sales: Mapping[str, Mapping[datetime, float]],
        slots: Sequence[datetime],
        grid: TimeGrid
    ):
        """
        Initialize forecaster.

        Args:
            bucketed_sales: Output of bucket_sales()
            slots: Planning horizon slots
            grid: Time grid
        """
        self.bucketed_sales = bucketed_sales
        self.slots = list(slots)
        self.grid = grid
        self._series: Dict[str, Dict[datetime, float]] = {}

    def series(self, product_id: str) -> Dict[datetime, float]:
        """Forecast series for a product over the horizon."""
        if product_id not in self._series:
            self._series[product_id] = forecast_demand(
                product_id, self.slots, self.bucketed_sales, self.grid
            )
            total = sum(self._series[product_id].values())
            logger.debug(f"Forecast for {product_id}: {total:.1f} units over {len(self.slots)} slots")
        return self._series[product_id]

    def demand_at(self, product_id: str, slot: datetime) -> float:
        return self.series(product_id).get(slot, 0.0)

    def cumulative_before(self, product_id: str, instant: datetime) -> float:
        return cumulative_forecast_before(self.series(product_id), instant)
