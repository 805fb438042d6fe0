"""
Terminal outcomes of the nutrition pipeline.

Each variant maps to exactly one outward status code, localized message and
optional diagnostic ``error`` string.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from meal_record_api.models.meal import ErrorResponse, NutritionEstimate

from .validator import ValidationReason

MSG_INVALID_INPUT = "입력값이 유효하지 않습니다"
MSG_MISSING_FOOD_NAME = "음식명이 없습니다"
MSG_INVALID_FOOD_NAME = "음식명이 올바르지 않습니다"
MSG_INVALID_QUANTITY = "섭취량이 올바르지 않습니다"
MSG_INVALID_UNIT = "섭취량 단위가 올바르지 않습니다"
MSG_UNANSWERABLE = "AI가 계산하기 어려운 영양성분입니다"
MSG_CALCULATION_FAILED = "영양 성분 계산에 실패했습니다"
MSG_UNAVAILABLE = "현재 영양성분 분석이 불가능합니다."

UNANSWERABLE_STATUS = 510


class FailureCategory(str, Enum):
    """Stable categories for model provider failures."""

    BAD_REQUEST = "bad_request"
    AUTH_FAILURE = "auth_failure"
    RATE_LIMITED_TOKENS = "rate_limited_tokens"
    RATE_LIMITED_GENERAL = "rate_limited_general"
    PROVIDER_SERVER_ERROR = "provider_server_error"
    CONTEXT_TOO_LONG = "context_too_long"
    TIMEOUT = "timeout"
    UNCLASSIFIED = "unclassified"

    @property
    def alert_worthy(self) -> bool:
        """Whether operators should be notified of this category."""
        return self in ALERT_WORTHY


ALERT_WORTHY = frozenset({
    FailureCategory.AUTH_FAILURE,
    FailureCategory.RATE_LIMITED_TOKENS,
    FailureCategory.RATE_LIMITED_GENERAL,
    FailureCategory.PROVIDER_SERVER_ERROR,
    FailureCategory.TIMEOUT,
})

VALIDATION_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.MISSING_BODY: MSG_INVALID_INPUT,
    ValidationReason.MISSING_FOOD_NAME: MSG_MISSING_FOOD_NAME,
    ValidationReason.EMPTY_FOOD_NAME: MSG_INVALID_FOOD_NAME,
    ValidationReason.PUNCTUATION_ONLY_FOOD_NAME: MSG_INVALID_FOOD_NAME,
    ValidationReason.INVALID_QUANTITY: MSG_INVALID_QUANTITY,
    ValidationReason.INVALID_UNIT: MSG_INVALID_UNIT,
}

# category -> (status code, message, diagnostic); None keeps the provider message
UPSTREAM_RESPONSES: dict[FailureCategory, tuple[int, str, str | None]] = {
    FailureCategory.BAD_REQUEST: (400, MSG_INVALID_INPUT, "Invalid request"),
    FailureCategory.CONTEXT_TOO_LONG: (400, MSG_INVALID_INPUT, "Input too long"),
    FailureCategory.AUTH_FAILURE: (500, MSG_CALCULATION_FAILED, "AI service authentication failed"),
    FailureCategory.RATE_LIMITED_TOKENS: (503, MSG_UNAVAILABLE, "Token quota exceeded"),
    FailureCategory.RATE_LIMITED_GENERAL: (503, MSG_UNAVAILABLE, "Too many requests"),
    FailureCategory.PROVIDER_SERVER_ERROR: (503, MSG_UNAVAILABLE, "AI service unavailable"),
    FailureCategory.TIMEOUT: (503, MSG_UNAVAILABLE, "Request timeout"),
    FailureCategory.UNCLASSIFIED: (500, MSG_CALCULATION_FAILED, None),
}


class PipelineOutcome:
    """Base class for every terminal pipeline result."""

    status_code: int = 500
    alert_worthy: bool = False

    @property
    def is_success(self) -> bool:
        return False

    @property
    def error(self) -> str | None:
        """Diagnostic error string, if any."""
        return None

    @property
    def nutrition(self) -> NutritionEstimate | None:
        return None

    def to_response(self) -> dict[str, Any]:
        """JSON body returned to the caller."""
        raise NotImplementedError


class _FailureOutcome(PipelineOutcome):
    message: str = MSG_CALCULATION_FAILED

    def to_response(self) -> dict[str, Any]:
        return ErrorResponse(
            code=self.status_code,
            message=self.message,
            error=self.error,
        ).model_dump(exclude_none=True)


@dataclass(frozen=True)
class Success(PipelineOutcome):
    estimate: NutritionEstimate

    status_code = 200

    @property
    def is_success(self) -> bool:
        return True

    @property
    def nutrition(self) -> NutritionEstimate:
        return self.estimate

    def to_response(self) -> dict[str, Any]:
        return self.estimate.to_response()


@dataclass(frozen=True)
class ValidationFailure(_FailureOutcome):
    reason: ValidationReason

    status_code = 400

    @property
    def message(self) -> str:
        return VALIDATION_MESSAGES[self.reason]


@dataclass(frozen=True)
class UnanswerableFailure(_FailureOutcome):
    status_code = UNANSWERABLE_STATUS
    message = MSG_UNANSWERABLE


@dataclass(frozen=True)
class ExtractionFailure(_FailureOutcome):
    raw_text: str

    status_code = 500

    @property
    def error(self) -> str:
        return "Invalid JSON format returned by AI"


@dataclass(frozen=True)
class ValueFailure(_FailureOutcome):
    reason: str
    field: str | None = None

    status_code = 500

    @property
    def error(self) -> str:
        return "Invalid nutrient values"


@dataclass(frozen=True)
class UpstreamFailure(_FailureOutcome):
    category: FailureCategory
    provider_message: str = ""
    provider_status: int | None = None

    @property
    def status_code(self) -> int:
        return UPSTREAM_RESPONSES[self.category][0]

    @property
    def message(self) -> str:
        return UPSTREAM_RESPONSES[self.category][1]

    @property
    def alert_worthy(self) -> bool:
        return self.category.alert_worthy

    @property
    def error(self) -> str:
        diagnostic = UPSTREAM_RESPONSES[self.category][2]
        return diagnostic if diagnostic is not None else self.provider_message
