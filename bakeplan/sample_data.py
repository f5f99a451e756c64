"""Reference bakery dataset used by the demo CLI and the tests.

Two products, two six-rack ovens and two days of POS and oven history.
Planning from 2025-10-23 05:00 with a five hour horizon reproduces the
reference morning bake schedule.
"""

from datetime import datetime
from typing import List

from bakeplan.models import PlanningInputs, ProductionEvent, ProductionUnit, ProductSpec, SalesRecord


#: Reference "now" for the sample dataset
SAMPLE_NOW = datetime(2025, 10, 23, 5, 0)

#: Reference horizon for the sample dataset (minutes)
SAMPLE_HORIZON_MINUTES = 5 * 60


_PRODUCTS = [
    ("WG_CHCR_LQ", "Chocolate Croissant"),
    ("WG_MUFF_BLU", "Blueberry Muffin"),
]

_POS = [
    ("2025-10-21 07:01:00", "WG_CHCR_LQ", 1),
    ("2025-10-21 07:20:00", "WG_CHCR_LQ", 5),
    ("2025-10-21 07:40:00", "WG_CHCR_LQ", 7),
    ("2025-10-21 08:00:00", "WG_CHCR_LQ", 10),
    ("2025-10-21 08:20:00", "WG_CHCR_LQ", 12),
    ("2025-10-21 08:40:00", "WG_CHCR_LQ", 8),
    ("2025-10-21 09:00:00", "WG_CHCR_LQ", 6),
    ("2025-10-21 09:20:00", "WG_MUFF_BLU", 5),
    ("2025-10-21 09:40:00", "WG_MUFF_BLU", 8),
    ("2025-10-21 10:00:00", "WG_MUFF_BLU", 10),
    ("2025-10-21 10:20:00", "WG_MUFF_BLU", 12),
    ("2025-10-22 07:00:00", "WG_CHCR_LQ", 6),
    ("2025-10-22 07:20:00", "WG_CHCR_LQ", 9),
    ("2025-10-22 07:40:00", "WG_CHCR_LQ", 12),
    ("2025-10-22 08:00:00", "WG_CHCR_LQ", 13),
    ("2025-10-22 08:20:00", "WG_CHCR_LQ", 10),
    ("2025-10-22 08:40:00", "WG_MUFF_BLU", 8),
    ("2025-10-22 09:00:00", "WG_MUFF_BLU", 9),
    ("2025-10-22 09:20:00", "WG_MUFF_BLU", 11),
    ("2025-10-22 09:40:00", "WG_MUFF_BLU", 10),
]

_OVEN_LOGS = [
    ("2025-10-21 06:00:00", "oven1", 1, "WG_CHCR_LQ", 12),
    ("2025-10-21 06:00:00", "oven1", 2, "WG_CHCR_LQ", 12),
    ("2025-10-21 06:20:00", "oven2", 1, "WG_MUFF_BLU", 12),
    ("2025-10-21 06:40:00", "oven2", 2, "WG_MUFF_BLU", 12),
    ("2025-10-22 06:00:00", "oven1", 1, "WG_CHCR_LQ", 12),
    ("2025-10-22 06:20:00", "oven1", 2, "WG_CHCR_LQ", 12),
    ("2025-10-22 06:40:00", "oven2", 1, "WG_MUFF_BLU", 12),
    ("2025-10-22 07:00:00", "oven2", 2, "WG_MUFF_BLU", 12),
]


def sample_products() -> List[ProductSpec]:
    return [
        ProductSpec(
            id=product_id,
            name=name,
            batch_sizes=[6, 12],
            bake_minutes=20,
            cool_minutes=20,
            sell_window_min=40,
            sell_window_max=120,
            perish_minutes=240,
        )
        for product_id, name in _PRODUCTS
    ]


def sample_units() -> List[ProductionUnit]:
    return [
        ProductionUnit(id="oven1", capacity=6),
        ProductionUnit(id="oven2", capacity=6),
    ]


def sample_sales() -> List[SalesRecord]:
    return [
        SalesRecord(timestamp=datetime.fromisoformat(ts), product_id=sku, quantity=qty)
        for ts, sku, qty in _POS
    ]


def sample_production_log() -> List[ProductionEvent]:
    return [
        ProductionEvent(
            timestamp=datetime.fromisoformat(ts),
            unit_id=oven,
            rack=rack,
            product_id=sku,
            quantity=qty,
        )
        for ts, oven, rack, sku, qty in _OVEN_LOGS
    ]


def build_sample_inputs() -> PlanningInputs:
    """Complete sample dataset ready for BakeScheduler."""
    return PlanningInputs(
        products=sample_products(),
        units=sample_units(),
        sales=sample_sales(),
        production_log=sample_production_log(),
    )
