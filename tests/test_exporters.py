"""Tests for bake plan exporters."""

import pytest
from datetime import datetime, timedelta

from openpyxl import load_workbook

from bakeplan.exporters import (
    exceptions_to_dataframe,
    export_plan_to_excel,
    format_plan_text,
    plan_to_dataframe,
    utilization_to_dataframe,
)
from bakeplan.models import ExceptionRecord, PlannedBatch
from bakeplan.planning import BakePlan


@pytest.fixture
def plan():
    start = datetime(2025, 10, 23, 5, 0)
    return BakePlan(
        planning_start=start,
        planning_end=start + timedelta(minutes=301),
        slots=[start + timedelta(minutes=20 * i) for i in range(16)],
        batches=[
            PlannedBatch(start=datetime(2025, 10, 23, 6, 20), unit_id="oven1", rack=1,
                         product_id="WG_CHCR_LQ", quantity=6),
            PlannedBatch(start=datetime(2025, 10, 23, 6, 20), unit_id="oven1", rack=2,
                         product_id="WG_MUFF_BLU", quantity=12),
        ],
        exceptions=[
            ExceptionRecord(slot=datetime(2025, 10, 23, 9, 0), product_id="WG_MUFF_BLU",
                            reason="capacity exhausted within freshness window", unmet_quantity=4),
        ],
        utilization={datetime(2025, 10, 23, 6, 20): (2, 12)},
    )


@pytest.fixture
def empty_plan():
    start = datetime(2025, 10, 23, 5, 0)
    return BakePlan(
        planning_start=start,
        planning_end=start + timedelta(minutes=61),
        slots=[start],
        batches=[],
        exceptions=[],
    )


class TestDataFrames:
    """Tests for DataFrame views of a plan."""

    def test_plan_to_dataframe(self, plan):
        df = plan_to_dataframe(plan)
        assert list(df.columns) == ["Start", "Unit", "Rack", "Product", "Quantity", "State"]
        assert len(df) == 2
        assert df.iloc[1]["Product"] == "WG_MUFF_BLU"
        assert df.iloc[0]["State"] == "planned"

    def test_exceptions_to_dataframe(self, plan):
        df = exceptions_to_dataframe(plan)
        assert len(df) == 1
        assert df.iloc[0]["Unmet Quantity"] == 4

    def test_utilization_to_dataframe(self, plan):
        df = utilization_to_dataframe(plan)
        assert df.iloc[0]["Racks Used"] == 2
        assert df.iloc[0]["Utilization"] == pytest.approx(2 / 12)

    def test_empty_plan_keeps_columns(self, empty_plan):
        assert plan_to_dataframe(empty_plan).empty
        assert list(exceptions_to_dataframe(empty_plan).columns) == [
            "Slot", "Product", "Reason", "Unmet Quantity"
        ]


class TestFormatPlanText:
    """Tests for the console layout."""

    def test_batches_and_exceptions(self, plan):
        text = format_plan_text(plan, {"WG_CHCR_LQ": "Chocolate Croissant"})
        lines = text.splitlines()
        assert lines[0] == "=== RECOMMENDED BAKE SCHEDULE (next 5 h) ==="
        assert "06:20 | oven1 r1 | WG_CHCR_LQ Chocolate Croissant x6 (planned)" in lines
        assert "06:20 | oven1 r2 | WG_MUFF_BLU x12 (planned)" in lines
        assert "=== EXCEPTIONS ===" in lines
        assert lines[-1].startswith("- Cannot meet demand for WG_MUFF_BLU at 2025-10-23 09:00")

    def test_empty_plan(self, empty_plan):
        text = format_plan_text(empty_plan)
        assert "(no batches required)" in text
        assert "EXCEPTIONS" not in text


class TestExportPlanToExcel:
    """Tests for Excel export."""

    def test_sheets_written(self, plan, tmp_path):
        output = export_plan_to_excel(plan, tmp_path / "plan.xlsx")
        assert output.exists()

        wb = load_workbook(output)
        assert wb.sheetnames == ["Schedule", "Exceptions", "Rack Utilization"]

        schedule = wb["Schedule"]
        assert schedule["A1"].value == "Start"
        assert schedule["A1"].font.bold
        assert schedule["B2"].value == "oven1"
        assert schedule["E3"].value == 12
        assert schedule.freeze_panes == "A2"

        exceptions = wb["Exceptions"]
        assert exceptions["B2"].value == "WG_MUFF_BLU"
