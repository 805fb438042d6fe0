"""Custom exception classes for the API."""

from typing import Any


class APIError(Exception):
    """
    Base exception for API errors.

    Rendered by the application exception handler as
    ``{"code": status_code, "message": message, "error": details}``.
    """

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class InvalidAPIKeyError(APIError):
    """Missing or mismatched x-api-key header."""

    def __init__(self):
        super().__init__(
            message="API 키가 유효하지 않습니다",
            status_code=400,
            details="Invalid API key",
        )


class ServiceNotReadyError(APIError):
    """Pipeline collaborators were not initialised by the lifespan."""

    def __init__(self, component: str):
        super().__init__(
            message="현재 영양성분 분석이 불가능합니다.",
            status_code=503,
            details=f"{component} not initialised",
        )
