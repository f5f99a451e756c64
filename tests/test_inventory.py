"""Tests for sellable inventory projection."""

import pytest
from datetime import timedelta

from bakeplan.models import PlannedBatch, ProductionEvent
from bakeplan.planning import InventoryProjector, bucket_production


def _event(timestamp, product_id="WG_CHCR_LQ", quantity=12):
    return ProductionEvent(
        timestamp=timestamp, unit_id="oven1", rack=1,
        product_id=product_id, quantity=quantity,
    )


class TestSellableOnHand:
    """Tests for InventoryProjector.sellable_on_hand."""

    @pytest.mark.parametrize("minutes_before,counted", [
        (20, False),   # still cooling
        (40, True),    # just ready
        (80, True),
        (120, True),   # window end is inclusive on the bake-start side
        (140, False),  # aged out
    ])
    def test_window_bounds(self, grid, croissant, demand_slot, minutes_before, counted):
        lots = bucket_production([_event(demand_slot - timedelta(minutes=minutes_before))], grid)
        projector = InventoryProjector(lots, grid)
        expected = 12 if counted else 0
        assert projector.sellable_on_hand(croissant, demand_slot) == expected

    def test_other_products_ignored(self, grid, croissant, demand_slot):
        lots = bucket_production([_event(demand_slot - timedelta(minutes=60), product_id="OTHER")], grid)
        projector = InventoryProjector(lots, grid)
        assert projector.sellable_on_hand(croissant, demand_slot) == 0

    def test_planned_batches_counted(self, grid, croissant, demand_slot):
        projector = InventoryProjector({}, grid)
        planned = [
            PlannedBatch(start=demand_slot - timedelta(minutes=40), unit_id="U1",
                         rack=1, product_id=croissant.id, quantity=6),
            PlannedBatch(start=demand_slot - timedelta(minutes=40), unit_id="U2",
                         rack=1, product_id="OTHER", quantity=12),
            PlannedBatch(start=demand_slot, unit_id="U1",
                         rack=1, product_id=croissant.id, quantity=12),
        ]
        assert projector.sellable_on_hand(croissant, demand_slot, planned) == 6

    def test_logged_and_planned_add_up(self, grid, croissant, demand_slot):
        lots = bucket_production([_event(demand_slot - timedelta(minutes=100), quantity=12)], grid)
        projector = InventoryProjector(lots, grid)
        planned = [
            PlannedBatch(start=demand_slot - timedelta(minutes=60), unit_id="U1",
                         rack=1, product_id=croissant.id, quantity=6),
        ]
        assert projector.sellable_on_hand(croissant, demand_slot, planned) == 18


class TestProjectedStock:
    """Tests for InventoryProjector.projected_stock."""

    def test_depleted_by_earlier_forecast(self, grid, croissant, demand_slot):
        lots = bucket_production([_event(demand_slot - timedelta(minutes=60), quantity=12)], grid)
        projector = InventoryProjector(lots, grid)
        forecast = {
            demand_slot - timedelta(minutes=40): 3.0,
            demand_slot - timedelta(minutes=20): 4.0,
            demand_slot: 100.0,
        }
        assert projector.projected_stock(croissant, demand_slot, [], forecast) == pytest.approx(5.0)

    def test_never_negative(self, grid, croissant, demand_slot):
        projector = InventoryProjector({}, grid)
        forecast = {demand_slot - timedelta(minutes=20): 10.0}
        assert projector.projected_stock(croissant, demand_slot, [], forecast) == 0.0

    def test_counts_batch_aged_exactly_window_max(self, grid, croissant, demand_slot):
        # The per-batch rule is half-open; slot stock includes the closing boundary
        assert not croissant.is_sellable_after(croissant.sell_window_max)
        lots = bucket_production(
            [_event(demand_slot - timedelta(minutes=croissant.sell_window_max), quantity=6)], grid
        )
        projector = InventoryProjector(lots, grid)
        assert projector.sellable_on_hand(croissant, demand_slot) == 6
