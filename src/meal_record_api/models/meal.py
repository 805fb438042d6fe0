"""Pydantic models for meal requests, nutrition results and meal logs."""

from datetime import datetime
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MealUnit(IntEnum):
    """Unit of the consumed quantity, as sent by clients (0-4)."""

    SERVING = 0
    PIECE = 1
    PLATE = 2
    GRAM = 3
    MILLILITER = 4

    @property
    def label(self) -> str:
        """English label used in prompts."""
        return UNIT_TABLE[self][0]

    @property
    def korean_label(self) -> str:
        """Korean label (인분, 개, ...)."""
        return UNIT_TABLE[self][1]


UNIT_TABLE: dict[MealUnit, tuple[str, str]] = {
    MealUnit.SERVING: ("servings", "인분"),
    MealUnit.PIECE: ("pieces", "개"),
    MealUnit.PLATE: ("plates", "접시"),
    MealUnit.GRAM: ("grams", "g"),
    MealUnit.MILLILITER: ("milliliters", "ml"),
}


class MealQuery(BaseModel):
    """A validated food/quantity/unit request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    food_name: str = Field(..., min_length=1, alias="foodName")
    quantity: int = Field(..., gt=0)
    unit: MealUnit

    @property
    def quantity_label(self) -> str:
        """Human-readable quantity, e.g. ``1 servings (1인분)``."""
        return (
            f"{self.quantity} {self.unit.label} "
            f"({self.quantity}{self.unit.korean_label})"
        )


class NutritionEstimate(BaseModel):
    """Estimated nutrients in grams for the requested quantity."""

    model_config = ConfigDict(populate_by_name=True)

    carbohydrate: float = Field(ge=0, description="Carbohydrate in grams")
    sugar: float = Field(ge=0, description="Sugar in grams")
    dietary_fiber: float = Field(ge=0, alias="dietaryFiber", description="Dietary fiber in grams")
    protein: float = Field(ge=0, description="Protein in grams")
    fat: float = Field(ge=0, description="Fat in grams")
    starch: float = Field(ge=0, description="Starch in grams")

    def to_response(self) -> dict[str, float]:
        """Serialize with the camelCase field names clients expect."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 outcome."""

    code: int
    message: str
    error: str | None = None


class MealLogRequest(BaseModel):
    """Request echo stored with each meal log."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: Any = Field(None, alias="foodName")
    quantity: Any = None
    unit: Any = None


class MealLogResponse(BaseModel):
    """Response summary stored with each meal log."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    nutrition: dict[str, float] | None = None
    error: str | None = None


class MealLogRecord(BaseModel):
    """One archived request/response pair (``meal-logs`` collection)."""

    timestamp: datetime
    request: MealLogRequest
    response: MealLogResponse

    def to_document(self) -> dict[str, Any]:
        """Convert to a MongoDB document."""
        return self.model_dump(by_alias=True)
