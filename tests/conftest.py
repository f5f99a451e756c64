"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime

from bakeplan.models import (
    ProductSpec,
    ProductionUnit,
    SalesRecord,
    TimeGrid,
)
from bakeplan.sample_data import build_sample_inputs


@pytest.fixture
def grid():
    """Fixture for the default 20-minute time grid."""
    return TimeGrid()


@pytest.fixture
def croissant():
    """Fixture for a product baked 20 min, cooled 20 min, sellable 40-120 min."""
    return ProductSpec(
        id="WG_CHCR_LQ",
        name="Chocolate Croissant",
        batch_sizes=[6, 12],
        bake_minutes=20,
        cool_minutes=20,
        sell_window_max=120,
        perish_minutes=240,
    )


@pytest.fixture
def muffin():
    """Fixture for a second product competing for the same racks."""
    return ProductSpec(
        id="WG_MUFF_BLU",
        name="Blueberry Muffin",
        batch_sizes=[6, 12],
        bake_minutes=20,
        cool_minutes=20,
        sell_window_max=120,
        perish_minutes=240,
    )


@pytest.fixture
def single_rack_units():
    """Fixture for two ovens with one rack each."""
    return [
        ProductionUnit(id="U1", capacity=1),
        ProductionUnit(id="U2", capacity=1),
    ]


@pytest.fixture
def demand_slot():
    """Fixture for a demand slot on the planning day."""
    return datetime(2025, 10, 23, 8, 0)


@pytest.fixture
def previous_day_sale(croissant):
    """Fixture for six units sold at 08:00 on the previous day."""
    return SalesRecord(
        timestamp=datetime(2025, 10, 22, 8, 0),
        product_id=croissant.id,
        quantity=6,
    )


@pytest.fixture
def sample_inputs():
    """Fixture for the reference bakery dataset."""
    return build_sample_inputs()
