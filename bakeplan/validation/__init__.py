"""Data validation module for pre-flight checks."""

from .data_validator import PlanningDataValidator, ValidationIssue, ValidationSeverity

__all__ = ["PlanningDataValidator", "ValidationIssue", "ValidationSeverity"]
