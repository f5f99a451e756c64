"""Data models for the bake planning application."""

from .time_grid import TimeGrid
from .product import ProductSpec
from .production_unit import ProductionUnit
from .history import SalesRecord, ProductionEvent
from .planned_batch import PlannedBatch, BatchState
from .exception_record import ExceptionRecord
from .planning_inputs import PlanningInputs

__all__ = [
    # Time
    "TimeGrid",
    # Catalog and topology
    "ProductSpec",
    "ProductionUnit",
    # History
    "SalesRecord",
    "ProductionEvent",
    # Plan output
    "PlannedBatch",
    "BatchState",
    "ExceptionRecord",
    # Run inputs
    "PlanningInputs",
]
