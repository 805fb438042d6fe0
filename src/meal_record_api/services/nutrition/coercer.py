"""Coercion of extracted model values into a NutritionEstimate."""

import math
import re
from typing import Any

from meal_record_api.models.meal import NutritionEstimate

# Wire names in the order they are checked.
REQUIRED_NUTRIENTS = ("carbohydrate", "sugar", "dietaryFiber", "protein", "fat", "starch")

# Signs are stripped too, so "-30" reads as 30.0.
NON_NUMERIC = re.compile(r"[^0-9.]")


class InvalidNutrientValues(Exception):
    """A nutrient field was missing, non-numeric or negative."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


def coerce_number(value: Any) -> float:
    """
    Coerce a single nutrient value.

    Text keeps only its digits and decimal points ("30g" -> 30.0); numbers
    pass through. Integers too large for a float, text that does not parse
    and anything else are NaN.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if isinstance(value, str):
        try:
            return float(NON_NUMERIC.sub("", value))
        except ValueError:
            return math.nan
    return math.nan


def coerce_nutrients(record: dict[str, Any]) -> NutritionEstimate:
    """
    Build a NutritionEstimate from an extracted record.

    Raises:
        InvalidNutrientValues: For the first field that is missing, not a
            finite number, or negative
    """
    values: dict[str, float] = {}
    for field in REQUIRED_NUTRIENTS:
        if field not in record:
            raise InvalidNutrientValues(field, "missing")
        value = coerce_number(record[field])
        if not math.isfinite(value):
            raise InvalidNutrientValues(field, "not a number")
        if value < 0:
            raise InvalidNutrientValues(field, "negative")
        values[field] = value

    return NutritionEstimate.model_validate(values)
