"""Excel parser for bake planning workbooks (.xlsx/.xlsm)."""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..models import (
    PlanningInputs,
    ProductionEvent,
    ProductionUnit,
    ProductSpec,
    SalesRecord,
)

logger = logging.getLogger(__name__)


def _optional_int(row: pd.Series, column: str) -> Optional[int]:
    """Integer value of an optional column, None when missing or blank."""
    if column not in row or pd.isna(row[column]):
        return None
    return int(row[column])


def _parse_batch_sizes(raw) -> List[int]:
    """Batch sizes from a cell such as "6, 12" or a single number."""
    if isinstance(raw, str):
        return [int(float(part)) for part in raw.replace(";", ",").split(",") if part.strip()]
    return [int(raw)]


class PlanningWorkbookParser:
    """
    Parser for bake planning workbooks.

    Expected file format:
    - Sheet 'Products': columns [id, name, batch_sizes, bake_minutes, cool_minutes,
      sell_window_max, sell_window_min?, perish_minutes?]; batch_sizes is a
      comma-separated list such as "6, 12"
    - Sheet 'ProductionUnits': columns [id, capacity, name?]; row order is the
      rack-assignment order
    - Sheet 'Sales': columns [timestamp, product_id, quantity]
    - Sheet 'ProductionLog' (optional): columns [timestamp, unit_id, rack, product_id, quantity]
    """

    PRODUCTS_SHEET = "Products"
    UNITS_SHEET = "ProductionUnits"
    SALES_SHEET = "Sales"
    PRODUCTION_LOG_SHEET = "ProductionLog"

    def __init__(self, file_path: Path | str):
        """
        Initialize parser with Excel file path.

        Args:
            file_path: Path to the Excel file (.xlsx or .xlsm)

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If file is not .xlsx or .xlsm
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if self.file_path.suffix.lower() not in [".xlsm", ".xlsx"]:
            raise ValueError(f"File must be .xlsm or .xlsx: {file_path}")

    def sheet_names(self) -> List[str]:
        with pd.ExcelFile(self.file_path, engine="openpyxl") as workbook:
            return list(workbook.sheet_names)

    def _read_sheet(self, sheet_name: str, required_cols: set) -> pd.DataFrame:
        """
        Read a sheet and check its columns.

        Raises:
            ValueError: If the sheet or a required column is missing
        """
        if sheet_name not in self.sheet_names():
            raise ValueError(f"Sheet '{sheet_name}' not found in {self.file_path.name}")

        df = pd.read_excel(self.file_path, sheet_name=sheet_name, engine="openpyxl")
        missing = required_cols - set(df.columns)
        if missing:
            raise ValueError(
                f"Sheet '{sheet_name}' is missing required columns: {sorted(missing)}"
            )
        return df

    def parse_products(self) -> List[ProductSpec]:
        """Parse the product catalog in sheet order."""
        df = self._read_sheet(
            self.PRODUCTS_SHEET,
            {"id", "name", "batch_sizes", "bake_minutes", "cool_minutes", "sell_window_max"},
        )

        products = []
        for _, row in df.iterrows():
            products.append(ProductSpec(
                id=str(row["id"]),
                name=str(row["name"]),
                batch_sizes=_parse_batch_sizes(row["batch_sizes"]),
                bake_minutes=int(row["bake_minutes"]),
                cool_minutes=int(row["cool_minutes"]),
                sell_window_min=_optional_int(row, "sell_window_min"),
                sell_window_max=int(row["sell_window_max"]),
                perish_minutes=_optional_int(row, "perish_minutes"),
            ))
        return products

    def parse_units(self) -> List[ProductionUnit]:
        """Parse production units in sheet order."""
        df = self._read_sheet(self.UNITS_SHEET, {"id", "capacity"})

        units = []
        for _, row in df.iterrows():
            name = row["name"] if "name" in row and pd.notna(row["name"]) else None
            units.append(ProductionUnit(
                id=str(row["id"]),
                capacity=int(row["capacity"]),
                name=str(name) if name is not None else None,
            ))
        return units

    def parse_sales(self) -> List[SalesRecord]:
        """Parse point-of-sale history."""
        df = self._read_sheet(self.SALES_SHEET, {"timestamp", "product_id", "quantity"})

        return [
            SalesRecord(
                timestamp=pd.to_datetime(row["timestamp"]).to_pydatetime(),
                product_id=str(row["product_id"]),
                quantity=float(row["quantity"]),
            )
            for _, row in df.iterrows()
        ]

    def parse_production_log(self) -> List[ProductionEvent]:
        """
        Parse logged production.

        Returns:
            Production events, or an empty list when the sheet is absent
        """
        if self.PRODUCTION_LOG_SHEET not in self.sheet_names():
            logger.info(f"No '{self.PRODUCTION_LOG_SHEET}' sheet in {self.file_path.name}; assuming no logged production")
            return []

        df = self._read_sheet(
            self.PRODUCTION_LOG_SHEET,
            {"timestamp", "unit_id", "rack", "product_id", "quantity"},
        )
        return [
            ProductionEvent(
                timestamp=pd.to_datetime(row["timestamp"]).to_pydatetime(),
                unit_id=str(row["unit_id"]),
                rack=int(row["rack"]),
                product_id=str(row["product_id"]),
                quantity=int(row["quantity"]),
            )
            for _, row in df.iterrows()
        ]

    def parse_all(self) -> PlanningInputs:
        """Parse every sheet into a PlanningInputs bundle."""
        inputs = PlanningInputs(
            products=self.parse_products(),
            units=self.parse_units(),
            sales=self.parse_sales(),
            production_log=self.parse_production_log(),
        )
        logger.info(f"Loaded {inputs} from {self.file_path.name}")
        return inputs
