"""Tests for time-of-day demand forecasting."""

import pytest
from datetime import datetime

from bakeplan.models import SalesRecord
from bakeplan.planning import (
    DemandForecaster,
    bucket_sales,
    cumulative_forecast_before,
    forecast_demand,
)


@pytest.fixture
def two_day_sales():
    """Sales at 07:00 on two days and at 07:20 on one day."""
    return [
        SalesRecord(timestamp=datetime(2025, 10, 21, 7, 0), product_id="P1", quantity=4),
        SalesRecord(timestamp=datetime(2025, 10, 22, 7, 5), product_id="P1", quantity=8),
        SalesRecord(timestamp=datetime(2025, 10, 22, 7, 20), product_id="P1", quantity=3),
    ]


class TestForecastDemand:
    """Tests for forecast_demand."""

    def test_mean_over_days_with_sales(self, grid, two_day_sales):
        slots = [datetime(2025, 10, 23, 7, 0), datetime(2025, 10, 23, 7, 20)]
        forecast = forecast_demand("P1", slots, bucket_sales(two_day_sales, grid), grid)
        assert forecast[datetime(2025, 10, 23, 7, 0)] == pytest.approx(6.0)
        # Only days with a sale in the slot are averaged
        assert forecast[datetime(2025, 10, 23, 7, 20)] == pytest.approx(3.0)

    def test_zero_without_history(self, grid, two_day_sales):
        slots = [datetime(2025, 10, 23, 12, 0)]
        forecast = forecast_demand("P1", slots, bucket_sales(two_day_sales, grid), grid)
        assert forecast == {datetime(2025, 10, 23, 12, 0): 0.0}

    def test_unknown_product_forecasts_zero(self, grid, two_day_sales):
        slots = [datetime(2025, 10, 23, 7, 0)]
        forecast = forecast_demand("P2", slots, bucket_sales(two_day_sales, grid), grid)
        assert forecast[datetime(2025, 10, 23, 7, 0)] == 0.0

    def test_calendar_date_does_not_matter(self, grid, two_day_sales):
        bucketed = bucket_sales(two_day_sales, grid)
        near = forecast_demand("P1", [datetime(2025, 10, 23, 7, 0)], bucketed, grid)
        far = forecast_demand("P1", [datetime(2027, 3, 2, 7, 0)], bucketed, grid)
        assert near[datetime(2025, 10, 23, 7, 0)] == far[datetime(2027, 3, 2, 7, 0)]

    def test_empty_horizon(self, grid, two_day_sales):
        assert forecast_demand("P1", [], bucket_sales(two_day_sales, grid), grid) == {}


class TestCumulativeForecast:
    """Tests for cumulative_forecast_before."""

    def test_strictly_before(self):
        forecast = {
            datetime(2025, 10, 23, 7, 0): 2.0,
            datetime(2025, 10, 23, 7, 20): 3.0,
            datetime(2025, 10, 23, 7, 40): 5.0,
        }
        assert cumulative_forecast_before(forecast, datetime(2025, 10, 23, 7, 0)) == 0.0
        assert cumulative_forecast_before(forecast, datetime(2025, 10, 23, 7, 40)) == 5.0
        assert cumulative_forecast_before(forecast, datetime(2025, 10, 23, 9, 0)) == 10.0


class TestDemandForecaster:
    """Tests for DemandForecaster."""

    def test_series_cached(self, grid, two_day_sales):
        slots = grid.slots_between(datetime(2025, 10, 23, 7, 0), datetime(2025, 10, 23, 8, 0))
        forecaster = DemandForecaster(bucket_sales(two_day_sales, grid), slots, grid)
        assert forecaster.series("P1") is forecaster.series("P1")
        assert list(forecaster.series("P1")) == slots

    def test_demand_and_cumulative(self, grid, two_day_sales):
        slots = grid.slots_between(datetime(2025, 10, 23, 7, 0), datetime(2025, 10, 23, 8, 0))
        forecaster = DemandForecaster(bucket_sales(two_day_sales, grid), slots, grid)
        assert forecaster.demand_at("P1", datetime(2025, 10, 23, 7, 0)) == pytest.approx(6.0)
        assert forecaster.demand_at("P1", datetime(2025, 10, 23, 12, 0)) == 0.0
        assert forecaster.cumulative_before("P1", datetime(2025, 10, 23, 7, 40)) == pytest.approx(9.0)
