"""Exceptions raised by the planning engine.

Only configuration problems raise. Demand that cannot be covered is
reported through ExceptionRecord entries on the plan instead.
"""

from typing import Dict, Optional


class PlanningError(Exception):
    """Base planning exception with optional context."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = f"Planning Error: {self.message}"
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg


class PlanningConfigurationError(PlanningError):
    """Inputs are inconsistent with the catalog or topology; the run is aborted."""
    pass


class UnknownProductError(PlanningConfigurationError):
    """A history record references a product missing from the catalog."""
    pass


class UnknownProductionUnitError(PlanningConfigurationError):
    """A production event references a unit or rack missing from the topology."""
    pass


class CapacityError(PlanningError):
    """A rack commitment conflicts with the capacity ledger."""
    pass


class DuplicateRackBookingError(PlanningConfigurationError):
    """Two production events occupy the same rack in the same slot."""
    pass
