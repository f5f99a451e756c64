"""Just-in-time bake planning for perishable products."""

__version__ = "0.1.0"
