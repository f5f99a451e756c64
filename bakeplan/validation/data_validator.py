"""Pre-flight data validation for bake planning.

Checks the catalog, oven topology and history before a planning run and
reports each problem as a ValidationIssue with guidance on how to fix it.
Only unknown product references are fatal for the scheduler itself; the
other checks flag data that would quietly degrade the plan.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from bakeplan.models import ProductionEvent, ProductionUnit, ProductSpec, SalesRecord, TimeGrid
from bakeplan.planning.errors import UnknownProductError


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        id: Unique identifier for the issue type
        category: Category of validation (e.g., "Completeness", "Consistency")
        severity: Severity level (INFO, WARNING, ERROR, CRITICAL)
        title: Short title describing the issue
        description: Detailed description of the issue
        impact: Explanation of how this affects planning
        fix_guidance: Guidance on how to fix the issue
        affected_data: Optional DataFrame showing affected rows
        metadata: Additional metadata about the issue
    """
    id: str
    category: str
    severity: ValidationSeverity
    title: str
    description: str
    impact: str
    fix_guidance: str
    affected_data: Optional[pd.DataFrame] = None
    metadata: Optional[Dict[str, Any]] = None


class PlanningDataValidator:
    """Validates bake planning inputs.

    Validates:
    - Completeness: catalog and oven topology present
    - Consistency: unique ids, history references known products and racks
    - Data quality: products without sales history, double-booked racks in the log
    """

    def __init__(
        self,
        products: Sequence[ProductSpec],
        units: Sequence[ProductionUnit],
        sales: Sequence[SalesRecord] = (),
        production_log: Sequence[ProductionEvent] = (),
        grid: Optional[TimeGrid] = None,
        reserve_logged_production: bool = False,
    ):
        """Initialize validator with data to validate.

        Args:
            products: Product catalog
            units: Production units
            sales: Historical sales records
            production_log: Historical production events
            grid: Time grid used to align logged bake starts
            reserve_logged_production: Logged production will occupy ledger racks,
                so a double-booked rack aborts planning
        """
        self.products = list(products)
        self.units = list(units)
        self.sales = list(sales)
        self.production_log = list(production_log)
        self.grid = grid or TimeGrid()
        self.reserve_logged_production = reserve_logged_production
        self.issues: List[ValidationIssue] = []

    def validate_all(self) -> List[ValidationIssue]:
        """Run all validation checks and return list of issues."""
        self.issues = []

        self.check_completeness()
        self.check_consistency()
        self.check_data_quality()

        return self.issues

    def check_completeness(self):
        """Validate catalog and topology are present."""
        if not self.products:
            self.issues.append(ValidationIssue(
                id="COMPL_001",
                category="Completeness",
                severity=ValidationSeverity.CRITICAL,
                title="No products defined",
                description="The product catalog is empty.",
                impact="Nothing can be forecast or scheduled.",
                fix_guidance="Add at least one row to the 'Products' sheet.",
            ))

        if not self.units:
            self.issues.append(ValidationIssue(
                id="COMPL_002",
                category="Completeness",
                severity=ValidationSeverity.CRITICAL,
                title="No production units defined",
                description="The oven topology is empty.",
                impact="Every shortfall will be reported as a capacity exception.",
                fix_guidance="Add at least one oven to the 'ProductionUnits' sheet.",
            ))

    def check_consistency(self):
        """Cross-reference ids between catalog, topology and history."""
        duplicate_products = [pid for pid, n in Counter(p.id for p in self.products).items() if n > 1]
        if duplicate_products:
            self.issues.append(ValidationIssue(
                id="CONS_001",
                category="Consistency",
                severity=ValidationSeverity.ERROR,
                title="Duplicate product ids",
                description=f"Product ids appear more than once: {', '.join(duplicate_products)}",
                impact="The same product would be scheduled twice per slot.",
                fix_guidance="Keep one row per product id in the 'Products' sheet.",
                metadata={"duplicates": duplicate_products},
            ))

        duplicate_units = [uid for uid, n in Counter(u.id for u in self.units).items() if n > 1]
        if duplicate_units:
            self.issues.append(ValidationIssue(
                id="CONS_002",
                category="Consistency",
                severity=ValidationSeverity.ERROR,
                title="Duplicate production unit ids",
                description=f"Unit ids appear more than once: {', '.join(duplicate_units)}",
                impact="Rack assignments become ambiguous for floor staff.",
                fix_guidance="Keep one row per oven in the 'ProductionUnits' sheet.",
                metadata={"duplicates": duplicate_units},
            ))

        known_products = {p.id for p in self.products}
        unknown_rows = [
            {"source": "Sales", "timestamp": r.timestamp, "product_id": r.product_id}
            for r in self.sales if r.product_id not in known_products
        ] + [
            {"source": "ProductionLog", "timestamp": e.timestamp, "product_id": e.product_id}
            for e in self.production_log if e.product_id not in known_products
        ]
        if unknown_rows:
            affected = pd.DataFrame(unknown_rows)
            unknown = sorted(affected["product_id"].unique())
            self.issues.append(ValidationIssue(
                id="CONS_003",
                category="Consistency",
                severity=ValidationSeverity.CRITICAL,
                title="History references unknown products",
                description=f"{len(unknown_rows)} record(s) reference products not in the catalog: {', '.join(unknown)}",
                impact="Planning is aborted before scheduling starts.",
                fix_guidance="Add the missing products to the catalog or remove the records.",
                affected_data=affected,
                metadata={"unknown_products": unknown},
            ))

        units_by_id = {u.id: u for u in self.units}
        bad_racks = [
            {"timestamp": e.timestamp, "unit_id": e.unit_id, "rack": e.rack, "product_id": e.product_id}
            for e in self.production_log
            if e.unit_id not in units_by_id or not units_by_id[e.unit_id].has_rack(e.rack)
        ]
        if bad_racks:
            self.issues.append(ValidationIssue(
                id="CONS_004",
                category="Consistency",
                severity=ValidationSeverity.ERROR,
                title="Production log references unknown racks",
                description=f"{len(bad_racks)} production event(s) use a unit or rack not in the topology.",
                impact="These events still count as stock but cannot block oven capacity.",
                fix_guidance="Check unit ids and rack numbers against the 'ProductionUnits' sheet.",
                affected_data=pd.DataFrame(bad_racks),
            ))

    def check_data_quality(self):
        """Flag data that degrades plan quality without breaking it."""
        products_with_sales = {r.product_id for r in self.sales}
        no_history = [p.id for p in self.products if p.id not in products_with_sales]
        if no_history:
            self.issues.append(ValidationIssue(
                id="QUAL_001",
                category="Data Quality",
                severity=ValidationSeverity.WARNING,
                title="Products without sales history",
                description=f"No sales recorded for: {', '.join(no_history)}",
                impact="Forecast demand is zero for these products, so nothing will be baked.",
                fix_guidance="Load POS history covering every product in the catalog.",
                metadata={"products": no_history},
            ))

        rack_usage = Counter(
            (self.grid.floor_to_slot(e.timestamp), e.unit_id, e.rack) for e in self.production_log
        )
        double_booked = [
            {"slot": slot, "unit_id": unit_id, "rack": rack, "events": count}
            for (slot, unit_id, rack), count in rack_usage.items() if count > 1
        ]
        if double_booked:
            self.issues.append(ValidationIssue(
                id="QUAL_002",
                category="Data Quality",
                severity=(
                    ValidationSeverity.ERROR if self.reserve_logged_production
                    else ValidationSeverity.WARNING
                ),
                title="Rack used twice in one slot",
                description=f"{len(double_booked)} rack/slot pair(s) appear more than once in the production log.",
                impact=(
                    "Planning is aborted when logged production reserves racks."
                    if self.reserve_logged_production
                    else "Logged stock may be double counted."
                ),
                fix_guidance="Check the production log for duplicated rows.",
                affected_data=pd.DataFrame(double_booked),
            ))

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get summary statistics of validation results.

        Returns:
            Dictionary with counts by severity and category
        """
        stats = {
            'total_issues': len(self.issues),
            'by_severity': {
                severity.value: len([i for i in self.issues if i.severity == severity])
                for severity in ValidationSeverity
            },
            'by_category': {}
        }

        for issue in self.issues:
            category = issue.category
            stats['by_category'][category] = stats['by_category'].get(category, 0) + 1

        return stats

    def has_critical_issues(self) -> bool:
        """Check if any critical issues exist."""
        return any(i.severity == ValidationSeverity.CRITICAL for i in self.issues)

    def has_errors_or_critical(self) -> bool:
        """Check if any errors or critical issues exist."""
        return any(i.severity in [ValidationSeverity.ERROR, ValidationSeverity.CRITICAL]
                   for i in self.issues)

    def raise_on_critical(self) -> None:
        """
        Raise for issues that would abort a planning run.

        Raises:
            UnknownProductError: If history references products missing from the catalog
        """
        for issue in self.issues:
            if issue.id == "CONS_003":
                raise UnknownProductError(
                    issue.description,
                    context={"unknown_products": ", ".join(issue.metadata["unknown_products"])},
                )
