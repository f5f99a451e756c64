"""Unit tests for data validator."""

import pytest
from datetime import datetime

from bakeplan.models import ProductionEvent, ProductionUnit, SalesRecord
from bakeplan.planning import UnknownProductError
from bakeplan.validation import PlanningDataValidator, ValidationIssue, ValidationSeverity


def _issue_ids(issues):
    return [issue.id for issue in issues]


class TestPlanningDataValidator:
    """Tests for PlanningDataValidator."""

    def test_sample_data_is_clean(self, sample_inputs):
        validator = PlanningDataValidator(
            sample_inputs.products,
            sample_inputs.units,
            sample_inputs.sales,
            sample_inputs.production_log,
        )
        issues = validator.validate_all()
        assert issues == []
        assert not validator.has_critical_issues()
        assert not validator.has_errors_or_critical()

    def test_empty_catalog_and_topology(self):
        validator = PlanningDataValidator([], [])
        issues = validator.validate_all()
        assert _issue_ids(issues) == ["COMPL_001", "COMPL_002"]
        assert all(i.severity == ValidationSeverity.CRITICAL for i in issues)
        assert validator.has_critical_issues()

    def test_duplicate_ids(self, croissant, previous_day_sale):
        units = [ProductionUnit(id="oven1", capacity=2), ProductionUnit(id="oven1", capacity=4)]
        validator = PlanningDataValidator([croissant, croissant], units, [previous_day_sale])
        ids = _issue_ids(validator.validate_all())
        assert "CONS_001" in ids
        assert "CONS_002" in ids
        assert validator.has_errors_or_critical()

    def test_unknown_products(self, croissant, single_rack_units, previous_day_sale):
        sales = [
            previous_day_sale,
            SalesRecord(timestamp=datetime(2025, 10, 22, 9, 0), product_id="GHOST", quantity=2),
        ]
        validator = PlanningDataValidator([croissant], single_rack_units, sales)
        issues = validator.validate_all()

        issue = next(i for i in issues if i.id == "CONS_003")
        assert isinstance(issue, ValidationIssue)
        assert issue.severity == ValidationSeverity.CRITICAL
        assert issue.metadata["unknown_products"] == ["GHOST"]
        assert len(issue.affected_data) == 1

        with pytest.raises(UnknownProductError, match="GHOST"):
            validator.raise_on_critical()

    def test_raise_on_critical_passes_without_unknown_products(self, croissant, single_rack_units):
        validator = PlanningDataValidator([croissant], single_rack_units)
        validator.validate_all()
        validator.raise_on_critical()

    def test_bad_racks_and_double_booking(self, croissant, single_rack_units, previous_day_sale):
        log = [
            ProductionEvent(timestamp=datetime(2025, 10, 22, 6, 0), unit_id="U1",
                            rack=1, product_id=croissant.id, quantity=6),
            ProductionEvent(timestamp=datetime(2025, 10, 22, 6, 10), unit_id="U1",
                            rack=1, product_id=croissant.id, quantity=6),
            ProductionEvent(timestamp=datetime(2025, 10, 22, 6, 0), unit_id="U9",
                            rack=1, product_id=croissant.id, quantity=6),
        ]
        validator = PlanningDataValidator([croissant], single_rack_units, [previous_day_sale], log)
        issues = {i.id: i for i in validator.validate_all()}

        assert issues["CONS_004"].severity == ValidationSeverity.ERROR
        assert len(issues["CONS_004"].affected_data) == 1
        assert issues["QUAL_002"].severity == ValidationSeverity.WARNING
        assert issues["QUAL_002"].affected_data.iloc[0]["events"] == 2

    def test_double_booking_is_error_when_reserving(self, croissant, single_rack_units, previous_day_sale):
        log = [
            ProductionEvent(timestamp=datetime(2025, 10, 22, 6, 0), unit_id="U1",
                            rack=1, product_id=croissant.id, quantity=6),
            ProductionEvent(timestamp=datetime(2025, 10, 22, 6, 5), unit_id="U1",
                            rack=1, product_id=croissant.id, quantity=6),
        ]
        validator = PlanningDataValidator(
            [croissant], single_rack_units, [previous_day_sale], log,
            reserve_logged_production=True,
        )
        issues = validator.validate_all()
        assert _issue_ids(issues) == ["QUAL_002"]
        assert issues[0].severity == ValidationSeverity.ERROR
        assert validator.has_errors_or_critical()

    def test_products_without_sales(self, croissant, muffin, single_rack_units, previous_day_sale):
        validator = PlanningDataValidator([croissant, muffin], single_rack_units, [previous_day_sale])
        issues = validator.validate_all()
        assert _issue_ids(issues) == ["QUAL_001"]
        assert issues[0].metadata["products"] == [muffin.id]
        assert not validator.has_errors_or_critical()

    def test_summary_stats(self):
        validator = PlanningDataValidator([], [])
        validator.validate_all()
        stats = validator.get_summary_stats()
        assert stats["total_issues"] == 2
        assert stats["by_severity"]["critical"] == 2
        assert stats["by_severity"]["warning"] == 0
        assert stats["by_category"] == {"Completeness": 2}
