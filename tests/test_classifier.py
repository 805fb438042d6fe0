"""Unit tests for upstream failure classification and outward responses."""

import pytest

from meal_record_api.services.nutrition import (
    FailureCategory,
    GatewayError,
    UpstreamFailure,
    classify_category,
    classify_gateway_error,
)


class TestClassifyCategory:
    """Tests for classification precedence."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (GatewayError("bad", status_code=400), FailureCategory.BAD_REQUEST),
            (GatewayError("nope", status_code=401), FailureCategory.AUTH_FAILURE),
            (GatewayError("forbidden", status_code=403), FailureCategory.AUTH_FAILURE),
            (GatewayError("slow down", status_code=429, error_type="tokens"), FailureCategory.RATE_LIMITED_TOKENS),
            (GatewayError("slow down", status_code=429), FailureCategory.RATE_LIMITED_GENERAL),
            (GatewayError("slow down", status_code=429, error_type="requests"), FailureCategory.RATE_LIMITED_GENERAL),
            (GatewayError("boom", status_code=500), FailureCategory.PROVIDER_SERVER_ERROR),
            (GatewayError("overloaded", status_code=503), FailureCategory.PROVIDER_SERVER_ERROR),
            (GatewayError("long", error_code="context_length_exceeded"), FailureCategory.CONTEXT_TOO_LONG),
            (GatewayError("slow", error_type="timeout"), FailureCategory.TIMEOUT),
            (GatewayError("weird"), FailureCategory.UNCLASSIFIED),
            (GatewayError("teapot", status_code=418), FailureCategory.UNCLASSIFIED),
        ],
    )
    def test_categories(self, error, expected):
        assert classify_category(error) == expected

    def test_status_takes_precedence_over_error_code(self):
        error = GatewayError("long", status_code=400, error_code="context_length_exceeded")

        assert classify_category(error) == FailureCategory.BAD_REQUEST

    def test_server_error_takes_precedence_over_timeout_type(self):
        error = GatewayError("gateway timeout", status_code=504, error_type="timeout")

        assert classify_category(error) == FailureCategory.PROVIDER_SERVER_ERROR


class TestAlertWorthy:
    """Tests for the alert flag."""

    @pytest.mark.parametrize(
        "category",
        [
            FailureCategory.AUTH_FAILURE,
            FailureCategory.RATE_LIMITED_TOKENS,
            FailureCategory.RATE_LIMITED_GENERAL,
            FailureCategory.PROVIDER_SERVER_ERROR,
            FailureCategory.TIMEOUT,
        ],
    )
    def test_alert_worthy(self, category):
        assert category.alert_worthy is True

    @pytest.mark.parametrize(
        "category",
        [
            FailureCategory.BAD_REQUEST,
            FailureCategory.CONTEXT_TOO_LONG,
            FailureCategory.UNCLASSIFIED,
        ],
    )
    def test_not_alert_worthy(self, category):
        assert category.alert_worthy is False


class TestUpstreamResponse:
    """Tests for the outward response of upstream failures."""

    def test_token_quota(self):
        outcome = classify_gateway_error(GatewayError("quota", status_code=429, error_type="tokens"))

        assert outcome.status_code == 503
        assert outcome.alert_worthy is True
        assert outcome.provider_status == 429
        assert outcome.to_response() == {
            "code": 503,
            "message": "현재 영양성분 분석이 불가능합니다.",
            "error": "Token quota exceeded",
        }

    def test_context_length(self):
        outcome = classify_gateway_error(GatewayError("too long", error_code="context_length_exceeded"))

        assert outcome.status_code == 400
        assert outcome.to_response() == {
            "code": 400,
            "message": "입력값이 유효하지 않습니다",
            "error": "Input too long",
        }

    def test_timeout(self):
        outcome = classify_gateway_error(GatewayError("timed out", error_type="timeout"))

        assert outcome.to_response()["code"] == 503
        assert outcome.error == "Request timeout"

    def test_unclassified_keeps_provider_message(self):
        outcome = classify_gateway_error(GatewayError("socket closed unexpectedly"))

        assert isinstance(outcome, UpstreamFailure)
        assert outcome.category == FailureCategory.UNCLASSIFIED
        assert outcome.to_response() == {
            "code": 500,
            "message": "영양 성분 계산에 실패했습니다",
            "error": "socket closed unexpectedly",
        }
