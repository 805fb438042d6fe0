"""Shared test data and in-memory collaborators."""

import json

from meal_record_api.services.alerts import DiscordAlertNotifier
from meal_record_api.services.nutrition import ModelGateway

TEST_API_KEY = "test-api-key"

KIMCHI_JJIGAE = {"foodName": "김치찌개", "quantity": 1, "unit": 0}

NUTRITION = {
    "carbohydrate": 30,
    "sugar": 5,
    "dietaryFiber": 3,
    "protein": 20,
    "fat": 10,
    "starch": 22,
}


class FakeGateway(ModelGateway):
    """Gateway returning a canned reply or raising a canned error."""

    def __init__(self, reply: str = json.dumps(NUTRITION), error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def invoke(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeMealLog:
    """In-memory stand-in for MealLogRepository."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.records: list[dict] = []

    async def log_meal_request(self, request, status_code, nutrition=None, error=None):
        if self.fail:
            raise RuntimeError("meal log unavailable")
        self.records.append(
            {
                "request": request,
                "status_code": status_code,
                "nutrition": nutrition,
                "error": error,
            }
        )
        return "log-id"


class FakeAlerts:
    """In-memory stand-in for DiscordAlertNotifier."""

    render = staticmethod(DiscordAlertNotifier.render)

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[str] = []

    async def send(self, content: str) -> bool:
        if self.fail:
            raise RuntimeError("webhook down")
        self.sent.append(content)
        return True
