"""Tests for logging configuration."""

import json
import logging

import pytest

from meal_record_api.core.config import Settings
from meal_record_api.core.logging import LOG_FILE_NAME, JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("meal", logging.INFO, __file__, 1, "Estimating %s", ("비빔밥",), None)
    record.food_name = "비빔밥"
    record.quantity = 2

    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "Estimating 비빔밥"
    assert data["level"] == "INFO"
    assert data["food_name"] == "비빔밥"
    assert data["quantity"] == 2


def test_file_handler_writes_json_lines(tmp_path, restore_root_logger):
    settings = Settings(log_file_enabled=True, log_dir=str(tmp_path), _env_file=None)
    configure_logging(settings, force=True)

    logging.getLogger("meal_record_api.test").info("stored", extra={"status_code": 200})
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8").strip().splitlines()[-1]
    data = json.loads(line)
    assert data["message"] == "stored"
    assert data["status_code"] == 200
