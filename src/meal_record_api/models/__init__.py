"""Pydantic models for API schemas."""

from .meal import (
    UNIT_TABLE,
    ErrorResponse,
    MealLogRecord,
    MealQuery,
    MealUnit,
    NutritionEstimate,
)

__all__ = [
    "UNIT_TABLE",
    "ErrorResponse",
    "MealLogRecord",
    "MealQuery",
    "MealUnit",
    "NutritionEstimate",
]
