"""Nutrition estimation pipeline: one request in, one terminal outcome out."""

import asyncio
import json
import logging
from collections.abc import Coroutine, Mapping
from typing import Any

from meal_record_api.agents.prompts.nutrition import build_nutrition_prompt
from meal_record_api.db.repositories.meal_logs import MealLogRepository
from meal_record_api.services.alerts import DiscordAlertNotifier

from .classifier import classify_gateway_error
from .coercer import InvalidNutrientValues, coerce_nutrients
from .extractor import ExtractionFailed, extract_record, is_unanswerable
from .gateway import ModelGateway, to_gateway_error
from .outcomes import (
    ExtractionFailure,
    PipelineOutcome,
    Success,
    UnanswerableFailure,
    UpstreamFailure,
    ValidationFailure,
    ValueFailure,
)
from .validator import InvalidMealRequest, validate_meal_request

logger = logging.getLogger(__name__)


def request_echo(body: Any) -> dict[str, Any]:
    """Best-effort copy of foodName/quantity/unit for the meal log."""
    data: Any = body
    if isinstance(body, (bytes, bytearray, str)):
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            data = None
    if not isinstance(data, Mapping):
        return {"foodName": None, "quantity": None, "unit": None}
    return {key: data.get(key) for key in ("foodName", "quantity", "unit")}


class NutritionPipeline:
    """
    Runs validation, prompting, the model call, extraction and coercion in
    strict order, stopping at the first failure.

    Every outcome is reported to the meal log, and alert-worthy upstream
    failures to the alert notifier. Reports run as background tasks and
    cannot change the outcome.

    Usage:
        pipeline = NutritionPipeline(gateway, meal_log=repo, alerts=notifier)
        outcome = await pipeline.run(raw_body)
        return JSONResponse(outcome.to_response(), status_code=outcome.status_code)
    """

    def __init__(
        self,
        gateway: ModelGateway,
        meal_log: MealLogRepository | None = None,
        alerts: DiscordAlertNotifier | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            gateway: Model gateway (one call per run)
            meal_log: Archive for request/response pairs (optional)
            alerts: Operator notifier for upstream failures (optional)
        """
        self.gateway = gateway
        self.meal_log = meal_log
        self.alerts = alerts
        self._background: set[asyncio.Task] = set()

    async def run(self, body: Any) -> PipelineOutcome:
        """
        Process one meal request.

        Args:
            body: Raw JSON body (bytes/str) or decoded mapping

        Returns:
            The terminal outcome; never raises for request-level failures
        """
        outcome = await self._execute(body)
        self._report(body, outcome)
        return outcome

    async def _execute(self, body: Any) -> PipelineOutcome:
        try:
            query = validate_meal_request(body)
        except InvalidMealRequest as e:
            logger.info(f"Rejected meal request: {e.reason.value}")
            return ValidationFailure(e.reason)

        prompt = build_nutrition_prompt(query)
        logger.info(
            f"Estimating nutrition for '{query.food_name}'",
            extra={
                "food_name": query.food_name,
                "quantity": query.quantity,
                "unit": int(query.unit),
                "prompt_version": prompt.version,
                "model": self.gateway.model_name,
            },
        )

        try:
            raw_text = await self.gateway.invoke(prompt.system, prompt.user)
        except Exception as e:
            outcome = classify_gateway_error(to_gateway_error(e))
            logger.error(
                f"Model call failed: {outcome.category.value}",
                extra={
                    "category": outcome.category.value,
                    "provider_status": outcome.provider_status,
                    "provider_message": outcome.provider_message,
                },
            )
            return outcome

        logger.debug(f"Raw model reply: {raw_text[:500]}")

        if is_unanswerable(raw_text):
            logger.info(f"Model declined to estimate '{query.food_name}'")
            return UnanswerableFailure()

        try:
            record = extract_record(raw_text)
        except ExtractionFailed as e:
            logger.error("Failed to parse model reply", extra={"raw_text": e.raw_text})
            return ExtractionFailure(e.raw_text)

        try:
            estimate = coerce_nutrients(record)
        except InvalidNutrientValues as e:
            logger.error(
                f"Invalid nutrient values: {e}",
                extra={"field": e.field, "record": record},
            )
            return ValueFailure(reason=e.reason, field=e.field)

        return Success(estimate)

    def _report(self, body: Any, outcome: PipelineOutcome) -> None:
        """Schedule the meal log write and, if needed, the alert."""
        if self.meal_log is not None:
            error = None if outcome.is_success else (outcome.error or outcome.message)
            self._schedule(
                self.meal_log.log_meal_request(
                    request=request_echo(body),
                    status_code=outcome.status_code,
                    nutrition=outcome.nutrition,
                    error=error,
                ),
                "meal log",
            )

        if self.alerts is not None and isinstance(outcome, UpstreamFailure) and outcome.alert_worthy:
            content = self.alerts.render(
                outcome.category.value,
                outcome.provider_status,
                outcome.provider_message,
            )
            self._schedule(self.alerts.send(content), "alert")

    def _schedule(self, coro: Coroutine[Any, Any, Any], label: str) -> None:
        task = asyncio.create_task(self._guard(coro, label))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    @staticmethod
    async def _guard(coro: Coroutine[Any, Any, Any], label: str) -> None:
        try:
            await coro
        except Exception as e:
            logger.error(f"Background {label} failed: {e}")

    async def wait_for_background(self) -> None:
        """Wait for pending meal log / alert tasks (shutdown and tests)."""
        if self._background:
            await asyncio.gather(*list(self._background))
