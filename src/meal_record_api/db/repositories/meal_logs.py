"""Repository for the meal-logs collection (request/response archive)."""

import logging
from datetime import datetime, timezone
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection

from meal_record_api.models.meal import (
    MealLogRecord,
    MealLogRequest,
    MealLogResponse,
    NutritionEstimate,
)

logger = logging.getLogger(__name__)


class MealLogRepository:
    """
    Archive of every meal request and its outcome.

    Writes are best effort: failures are logged and swallowed so that
    archiving never changes what the caller receives.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance (``meal-logs``)
        """
        self.collection = collection

    @staticmethod
    def build_record(
        request: dict[str, Any],
        status_code: int,
        nutrition: NutritionEstimate | None = None,
        error: str | None = None,
    ) -> MealLogRecord:
        """Assemble the document stored for one request."""
        return MealLogRecord(
            timestamp=datetime.now(timezone.utc),
            request=MealLogRequest(
                food_name=request.get("foodName"),
                quantity=request.get("quantity"),
                unit=request.get("unit"),
            ),
            response=MealLogResponse(
                status_code=status_code,
                nutrition=nutrition.to_response() if nutrition else None,
                error=error,
            ),
        )

    async def log_meal_request(
        self,
        request: dict[str, Any],
        status_code: int,
        nutrition: NutritionEstimate | None = None,
        error: str | None = None,
    ) -> str | None:
        """
        Store one request/response pair.

        Args:
            request: Request echo (foodName, quantity, unit as received)
            status_code: Outward status code
            nutrition: Estimate on success
            error: Diagnostic error on failure

        Returns:
            Inserted document ID, or None if the write failed
        """
        record = self.build_record(request, status_code, nutrition, error)
        try:
            result = await self.collection.insert_one(record.to_document())
        except Exception as e:
            logger.error(f"Meal log write failed: {e}")
            return None
        return str(result.inserted_id)
