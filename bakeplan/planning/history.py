"""Slot bucketing of historical sales and production.

Both transforms are pure: they never filter by date, so every recorded day
contributes to the time-of-day forecast and to the on-hand projection.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List

from bakeplan.models.history import ProductionEvent, SalesRecord
from bakeplan.models.time_grid import TimeGrid


@dataclass(frozen=True)
class ProductionLot:
    """
    A logged batch aligned to its slot.

    Attributes:
        slot_start: Slot-aligned bake start
        unit_id: Production unit used
        rack: Rack index within the unit
        quantity: Units produced
    """
    slot_start: datetime
    unit_id: str
    rack: int
    quantity: int


def bucket_sales(
    records: Iterable[SalesRecord],
    grid: TimeGrid
) -> Dict[str, Dict[datetime, float]]:
    """
    Sum sales per product and slot.

    Args:
        records: Sales records in any order
        grid: Time grid used to align timestamps

    Returns:
        product_id -> {slot_start: total quantity sold in that slot}

    Example:
        # 07:01 and 07:15 land in the 07:00 slot and are summed
        buckets = bucket_sales(records, TimeGrid())
        buckets["WG_CHCR_LQ"][datetime(2025, 10, 21, 7, 0)]  # 6.0
    """
    buckets: Dict[str, Dict[datetime, float]] = {}
    for record in records:
        slot = grid.floor_to_slot(record.timestamp)
        by_slot = buckets.setdefault(record.product_id, {})
        by_slot[slot] = by_slot.get(slot, 0.0) + record.quantity
    return buckets


def bucket_production(
    events: Iterable[ProductionEvent],
    grid: TimeGrid
) -> Dict[str, List[ProductionLot]]:
    """
    Group logged production per product, ordered by slot.

    Args:
        events: Production events in any order
        grid: Time grid used to align bake starts

    Returns:
        product_id -> lots sorted by slot_start (ties keep input order)
    """
    lots: Dict[str, List[ProductionLot]] = defaultdict(list)
    for event in events:
        lots[event.product_id].append(ProductionLot(
            slot_start=grid.floor_to_slot(event.timestamp),
            unit_id=event.unit_id,
            rack=event.rack,
            quantity=event.quantity,
        ))

    # list.sort is stable, so same-slot lots stay in input order
    for product_lots in lots.values():
        product_lots.sort(key=lambda lot: lot.slot_start)

    return dict(lots)
