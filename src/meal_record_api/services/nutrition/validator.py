"""Validation of the raw meal request body."""

import json
import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from meal_record_api.models.meal import MealQuery, MealUnit


class ValidationReason(str, Enum):
    """Why a request body was rejected."""

    MISSING_BODY = "missing_body"
    MISSING_FOOD_NAME = "missing_food_name"
    EMPTY_FOOD_NAME = "empty_food_name"
    PUNCTUATION_ONLY_FOOD_NAME = "punctuation_only_food_name"
    INVALID_QUANTITY = "invalid_quantity"
    INVALID_UNIT = "invalid_unit"


class InvalidMealRequest(Exception):
    """The request body failed validation."""

    def __init__(self, reason: ValidationReason):
        self.reason = reason
        super().__init__(reason.value)


# ASCII punctuation, CJK / full-width punctuation and symbols, plus interior
# whitespace. A name made only of these does not name a food.
PUNCTUATION_ONLY = re.compile(
    r"^[\s!-/:-@\[-`{-~"
    r"·‥…‘’“”〃、。〈〉《》「」『』【】〔〕※～〜"
    r"！＂＃＄％＆＇（）＊＋，－．／：；＜＝＞？＠［＼］＾＿｀｛｜｝￦₩]+$"
)

VALID_UNITS = {unit.value for unit in MealUnit}


def _as_integer(value: Any) -> int | None:
    """Return ``value`` as an int if it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _decode_body(body: Any) -> Mapping[str, Any]:
    if isinstance(body, Mapping):
        return body
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidMealRequest(ValidationReason.MISSING_BODY)
    if not isinstance(body, str) or not body.strip():
        raise InvalidMealRequest(ValidationReason.MISSING_BODY)
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        raise InvalidMealRequest(ValidationReason.MISSING_BODY)
    if not isinstance(data, dict):
        raise InvalidMealRequest(ValidationReason.MISSING_BODY)
    return data


def validate_meal_request(body: Any) -> MealQuery:
    """
    Validate a raw request body into a MealQuery.

    Checks run in a fixed order and the first failure wins.

    Args:
        body: Raw JSON text/bytes, or an already-decoded mapping

    Returns:
        The validated MealQuery (food name trimmed)

    Raises:
        InvalidMealRequest: With the reason of the first failing check
    """
    data = _decode_body(body)

    food_name = data.get("foodName")
    if not isinstance(food_name, str) or not food_name:
        raise InvalidMealRequest(ValidationReason.MISSING_FOOD_NAME)

    food_name = food_name.strip()
    if not food_name:
        raise InvalidMealRequest(ValidationReason.EMPTY_FOOD_NAME)

    if PUNCTUATION_ONLY.match(food_name):
        raise InvalidMealRequest(ValidationReason.PUNCTUATION_ONLY_FOOD_NAME)

    quantity = _as_integer(data.get("quantity"))
    if quantity is None or quantity <= 0:
        raise InvalidMealRequest(ValidationReason.INVALID_QUANTITY)

    unit = _as_integer(data.get("unit"))
    if unit is None or unit not in VALID_UNITS:
        raise InvalidMealRequest(ValidationReason.INVALID_UNIT)

    return MealQuery(food_name=food_name, quantity=quantity, unit=MealUnit(unit))
