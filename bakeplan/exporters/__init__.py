"""Export utilities for bake plans."""

from .schedule_export import (
    plan_to_dataframe,
    exceptions_to_dataframe,
    utilization_to_dataframe,
    format_plan_text,
    export_plan_to_excel,
)

__all__ = [
    'plan_to_dataframe',
    'exceptions_to_dataframe',
    'utilization_to_dataframe',
    'format_plan_text',
    'export_plan_to_excel',
]
