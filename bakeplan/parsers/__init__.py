"""Parsers for input data files."""

from .excel_parser import PlanningWorkbookParser

__all__ = [
    "PlanningWorkbookParser",
]
