"""Meal Record API: AI nutrition estimation service."""

__version__ = "1.0.0"
