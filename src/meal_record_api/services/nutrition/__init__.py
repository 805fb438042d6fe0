"""
Nutrition estimation pipeline.

Validates a meal request, asks the language model for an estimate, and turns
its free-text reply into a NutritionEstimate or a classified failure.
"""

from .classifier import classify_category, classify_gateway_error
from .coercer import InvalidNutrientValues, coerce_nutrients
from .extractor import ExtractionFailed, extract_record, is_unanswerable
from .gateway import GatewayError, LangChainModelGateway, ModelGateway
from .outcomes import (
    ExtractionFailure,
    FailureCategory,
    PipelineOutcome,
    Success,
    UnanswerableFailure,
    UpstreamFailure,
    ValidationFailure,
    ValueFailure,
)
from .pipeline import NutritionPipeline
from .validator import InvalidMealRequest, ValidationReason, validate_meal_request

__all__ = [
    # Pipeline
    "NutritionPipeline",
    # Stages
    "validate_meal_request",
    "extract_record",
    "is_unanswerable",
    "coerce_nutrients",
    "classify_category",
    "classify_gateway_error",
    # Gateway
    "ModelGateway",
    "LangChainModelGateway",
    "GatewayError",
    # Outcomes
    "PipelineOutcome",
    "Success",
    "ValidationFailure",
    "UnanswerableFailure",
    "ExtractionFailure",
    "ValueFailure",
    "UpstreamFailure",
    "FailureCategory",
    # Stage errors
    "InvalidMealRequest",
    "ValidationReason",
    "ExtractionFailed",
    "InvalidNutrientValues",
]
