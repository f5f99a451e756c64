"""
Command-line bake planner.

Usage:
    bakeplan --workbook planning.xlsx [--now "2025-10-23 05:00"] [--horizon-minutes 300]
    bakeplan --demo

Examples:
    # Plan the reference bakery morning
    bakeplan --demo

    # Plan from a workbook and export the schedule
    bakeplan --workbook "data/store_42.xlsx" --now "2025-10-23 05:00" --export plan.xlsx
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from bakeplan.exporters import export_plan_to_excel, format_plan_text
from bakeplan.parsers import PlanningWorkbookParser
from bakeplan.planning import BakeScheduler, PlannerConfig, PlanningError
from bakeplan.sample_data import SAMPLE_HORIZON_MINUTES, SAMPLE_NOW, build_sample_inputs
from bakeplan.validation import PlanningDataValidator, ValidationSeverity

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan just-in-time bake batches from sales history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    bakeplan --demo
    bakeplan --workbook planning.xlsx --now "2025-10-23 05:00"
    bakeplan --workbook planning.xlsx --safety-stock 2 --export plan.xlsx
        """,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workbook",
        type=str,
        help="Planning workbook (.xlsx/.xlsm) with Products, ProductionUnits, Sales and ProductionLog sheets",
    )
    source.add_argument(
        "--demo",
        action="store_true",
        help="Plan the built-in sample bakery",
    )

    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Planning reference time, ISO format (default: current time, or the sample time with --demo)",
    )
    parser.add_argument(
        "--horizon-minutes",
        type=int,
        default=None,
        help="Planning horizon in minutes (default: 300)",
    )
    parser.add_argument(
        "--safety-stock",
        type=float,
        default=0.0,
        help="Units added to forecast demand at every slot (default: 0)",
    )
    parser.add_argument(
        "--reserve-logged-production",
        action="store_true",
        help="Treat logged production as occupying its oven rack",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write the schedule to this Excel file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the bake planner CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.demo:
            inputs = build_sample_inputs()
            now = args.now or SAMPLE_NOW
            horizon = args.horizon_minutes if args.horizon_minutes is not None else SAMPLE_HORIZON_MINUTES
        else:
            inputs = PlanningWorkbookParser(args.workbook).parse_all()
            now = args.now or datetime.now()
            horizon = args.horizon_minutes

        config = PlannerConfig(
            safety_stock=args.safety_stock,
            reserve_logged_production=args.reserve_logged_production,
        )

        validator = PlanningDataValidator(
            inputs.products,
            inputs.units,
            inputs.sales,
            inputs.production_log,
            grid=config.grid,
            reserve_logged_production=config.reserve_logged_production,
        )
        for issue in validator.validate_all():
            if issue.severity in (ValidationSeverity.WARNING, ValidationSeverity.ERROR):
                logger.warning(f"{issue.id} {issue.title}: {issue.description}")
        validator.raise_on_critical()

        scheduler = BakeScheduler(
            inputs.products,
            inputs.units,
            inputs.sales,
            inputs.production_log,
            config=config,
        )
        plan = scheduler.plan(now, horizon_minutes=horizon)

    except (PlanningError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_plan_text(plan, {p.id: p.name for p in inputs.products}))

    if args.export:
        output_path = export_plan_to_excel(plan, Path(args.export))
        print(f"\nSchedule written to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
