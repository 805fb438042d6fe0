"""Classification of gateway failures into outward error categories."""

from .gateway import GatewayError
from .outcomes import FailureCategory, UpstreamFailure


def classify_category(error: GatewayError) -> FailureCategory:
    """Pick the category for a gateway error; the first matching rule wins."""
    status = error.status_code

    if status == 400:
        return FailureCategory.BAD_REQUEST
    if status in (401, 403):
        return FailureCategory.AUTH_FAILURE
    if status == 429:
        if error.error_type == "tokens":
            return FailureCategory.RATE_LIMITED_TOKENS
        return FailureCategory.RATE_LIMITED_GENERAL
    if status is not None and status >= 500:
        return FailureCategory.PROVIDER_SERVER_ERROR
    if error.error_code == "context_length_exceeded":
        return FailureCategory.CONTEXT_TOO_LONG
    if error.error_type == "timeout":
        return FailureCategory.TIMEOUT
    return FailureCategory.UNCLASSIFIED


def classify_gateway_error(error: GatewayError) -> UpstreamFailure:
    """Wrap a gateway error into its terminal outcome."""
    return UpstreamFailure(
        category=classify_category(error),
        provider_message=error.message,
        provider_status=error.status_code,
    )
