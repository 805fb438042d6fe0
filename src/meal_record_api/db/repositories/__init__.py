"""Repository pattern implementations for MongoDB collections."""

from .meal_logs import MealLogRepository

__all__ = ["MealLogRepository"]
