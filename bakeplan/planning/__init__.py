"""Bake planning engine.

This package turns sales history into a rack-level bake schedule:
- Slot bucketing of sales and production history
- Time-of-day demand forecasting
- Sellable inventory projection within the freshness window
- Per-slot rack capacity ledger
- Greedy just-in-time scheduling with exception reporting
"""

from .config import PlannerConfig
from .errors import (
    PlanningError,
    PlanningConfigurationError,
    UnknownProductError,
    UnknownProductionUnitError,
    DuplicateRackBookingError,
    CapacityError,
)
from .history import ProductionLot, bucket_sales, bucket_production
from .forecaster import DemandForecaster, forecast_demand, cumulative_forecast_before
from .inventory import InventoryProjector
from .capacity import CapacityLedger, SlotCapacityRecord, OccupancyEntry
from .placement import PlacementStrategy, LatestFeasiblePlacement
from .scheduler import BakeScheduler, BakePlan, choose_batch_size

__all__ = [
    'PlannerConfig',
    'PlanningError',
    'PlanningConfigurationError',
    'UnknownProductError',
    'UnknownProductionUnitError',
    'DuplicateRackBookingError',
    'CapacityError',
    'ProductionLot',
    'bucket_sales',
    'bucket_production',
    'DemandForecaster',
    'forecast_demand',
    'cumulative_forecast_before',
    'InventoryProjector',
    'CapacityLedger',
    'SlotCapacityRecord',
    'OccupancyEntry',
    'PlacementStrategy',
    'LatestFeasiblePlacement',
    'BakeScheduler',
    'BakePlan',
    'choose_batch_size',
]
