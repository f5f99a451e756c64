"""
Export of bake plans for floor staff and planners.

This module provides:
1. DataFrame views of the schedule and its exceptions
2. The plain-text console layout used at the bake station
3. A formatted Excel workbook (Schedule, Exceptions, Rack Utilization)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from bakeplan.planning.scheduler import BakePlan

# Color constants
HEADER_COLOR = "1E88E5"
ALT_ROW_COLOR = "F5F5F5"
ERROR_COLOR = "FFCDD2"

SCHEDULE_COLUMNS = ["Start", "Unit", "Rack", "Product", "Quantity", "State"]
EXCEPTION_COLUMNS = ["Slot", "Product", "Reason", "Unmet Quantity"]
UTILIZATION_COLUMNS = ["Slot", "Racks Used", "Racks Total", "Utilization"]


def create_header_style() -> Dict[str, Any]:
    """Create header row style (blue background, white text, bold)."""
    return {
        'font': Font(name='Calibri', size=11, bold=True, color='FFFFFF'),
        'fill': PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid'),
        'alignment': Alignment(horizontal='center', vertical='center', wrap_text=True),
        'border': Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
    }


def plan_to_dataframe(plan: BakePlan) -> pd.DataFrame:
    """Planned batches as a DataFrame in schedule order."""
    rows = [
        {
            "Start": batch.start,
            "Unit": batch.unit_id,
            "Rack": batch.rack,
            "Product": batch.product_id,
            "Quantity": batch.quantity,
            "State": batch.state.value,
        }
        for batch in plan.batches
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def exceptions_to_dataframe(plan: BakePlan) -> pd.DataFrame:
    """Exception records as a DataFrame in the order they were raised."""
    rows = [
        {
            "Slot": record.slot,
            "Product": record.product_id,
            "Reason": record.reason,
            "Unmet Quantity": record.unmet_quantity,
        }
        for record in plan.exceptions
    ]
    return pd.DataFrame(rows, columns=EXCEPTION_COLUMNS)


def utilization_to_dataframe(plan: BakePlan) -> pd.DataFrame:
    """Rack usage per slot touched by the run."""
    rows = [
        {
            "Slot": slot,
            "Racks Used": used,
            "Racks Total": total,
            "Utilization": used / total if total else 0.0,
        }
        for slot, (used, total) in sorted(plan.utilization.items())
    ]
    return pd.DataFrame(rows, columns=UTILIZATION_COLUMNS)


def format_plan_text(plan: BakePlan, product_names: Optional[Dict[str, str]] = None) -> str:
    """
    Console layout of a bake plan.

    Args:
        plan: Plan to render
        product_names: Optional product_id -> display name mapping

    Returns:
        Multi-line text, one line per batch, followed by exceptions if any
    """
    hours = (plan.planning_end - plan.planning_start).total_seconds() / 3600
    lines: List[str] = [f"=== RECOMMENDED BAKE SCHEDULE (next {hours:.0f} h) ===", ""]

    for batch in plan.batches:
        label = batch.product_id
        if product_names and batch.product_id in product_names:
            label = f"{batch.product_id} {product_names[batch.product_id]}"
        lines.append(
            f"{batch.start:%H:%M} | {batch.unit_id} r{batch.rack} | "
            f"{label} x{batch.quantity} ({batch.state.value})"
        )

    if not plan.batches:
        lines.append("(no batches required)")

    if plan.exceptions:
        lines.extend(["", "=== EXCEPTIONS ==="])
        for record in plan.exceptions:
            lines.append(f"- {record.message}")

    return "\n".join(lines)


def _write_sheet(wb: Workbook, title: str, df: pd.DataFrame, highlight: Optional[str] = None) -> None:
    """Write a DataFrame to a new sheet with header styling and filters."""
    ws = wb.create_sheet(title)
    headers = list(df.columns)

    style = create_header_style()
    for col_idx, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.value = header
        cell.font = style['font']
        cell.fill = style['fill']
        cell.alignment = style['alignment']
        cell.border = style['border']

    for row_idx, row_data in enumerate(df.itertuples(index=False), 2):
        for col_idx, value in enumerate(row_data, 1):
            cell = ws.cell(row=row_idx, column=col_idx)
            cell.value = value.to_pydatetime() if isinstance(value, pd.Timestamp) else value
            if headers[col_idx - 1] in ("Start", "Slot"):
                cell.number_format = 'yyyy-mm-dd hh:mm'
            elif headers[col_idx - 1] == "Utilization":
                cell.number_format = '0.0%'
            if highlight:
                cell.fill = PatternFill(start_color=highlight, end_color=highlight, fill_type='solid')
            elif (row_idx - 2) % 2 == 1:
                cell.fill = PatternFill(start_color=ALT_ROW_COLOR, end_color=ALT_ROW_COLOR, fill_type='solid')

    ws.auto_filter.ref = f"A1:{get_column_letter(len(headers))}1"
    ws.freeze_panes = 'A2'
    for col_idx, header in enumerate(headers, 1):
        ws.column_dimensions[get_column_letter(col_idx)].width = max(len(header) + 4, 18)


def export_plan_to_excel(plan: BakePlan, output_path: Path | str) -> Path:
    """
    Export a bake plan to a formatted Excel file.

    Creates 3 sheets:
    1. Schedule - Planned batches by start, unit and rack
    2. Exceptions - Uncovered demand (highlighted)
    3. Rack Utilization - Used vs total racks per slot

    Args:
        plan: Plan to export
        output_path: Destination .xlsx path

    Returns:
        Path to created file
    """
    wb = Workbook()
    wb.remove(wb.active)

    _write_sheet(wb, "Schedule", plan_to_dataframe(plan))
    _write_sheet(wb, "Exceptions", exceptions_to_dataframe(plan), highlight=ERROR_COLOR)
    _write_sheet(wb, "Rack Utilization", utilization_to_dataframe(plan))

    output_path = Path(output_path)
    wb.save(output_path)
    return output_path
