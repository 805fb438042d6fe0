"""Unit tests for recovering JSON records from model replies."""

import json

import pytest

from meal_record_api.services.nutrition import ExtractionFailed, extract_record, is_unanswerable

from .helpers import NUTRITION


class TestIsUnanswerable:
    """Tests for the None signal."""

    def test_bare_none(self):
        assert is_unanswerable("None") is True

    def test_none_anywhere_in_text(self):
        assert is_unanswerable('Sorry, None. {"carbohydrate": 1}') is True

    def test_case_sensitive(self):
        assert is_unanswerable("none of these values are estimates") is False

    def test_clean_json(self):
        assert is_unanswerable(json.dumps(NUTRITION)) is False


class TestExtractRecord:
    """Tests for narrow-then-wide extraction."""

    def test_clean_json_is_returned_unchanged(self):
        raw = '{"carbohydrate":30,"sugar":5,"dietaryFiber":3,"protein":20,"fat":10,"starch":22}'

        assert extract_record(raw) == NUTRITION

    def test_repairs_line_comment_and_trailing_comma(self):
        raw = (
            '{"carbohydrate":30, // note\n"sugar":5, "dietaryFiber":3, '
            '"protein":20, "fat":10, "starch":22,}'
        )

        assert extract_record(raw) == NUTRITION

    def test_json_wrapped_in_prose(self):
        raw = (
            "Here is the estimate for one serving:\n"
            f"```json\n{json.dumps(NUTRITION, indent=2)}\n```\n"
            "Values are approximate."
        )

        assert extract_record(raw) == NUTRITION

    def test_trailing_comma_with_whitespace_before_brace(self):
        raw = '{"carbohydrate": 30, "sugar": 5,\n   }'

        assert extract_record(raw) == {"carbohydrate": 30, "sugar": 5}

    def test_nested_object_falls_back_to_wide_span(self):
        raw = 'Result: {"nutrition": {"protein": 20}, "fat": 10} done'

        assert extract_record(raw) == {"nutrition": {"protein": 20}, "fat": 10}

    def test_first_object_wins_when_several_are_present(self):
        raw = '{"protein": 1} and later {"protein": 2}'

        assert extract_record(raw) == {"protein": 1}

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "I cannot estimate that.",
            "{not json at all}",
            "{'carbohydrate': 30}",
            "} backwards {",
        ],
    )
    def test_unrecoverable_text_raises(self, raw):
        with pytest.raises(ExtractionFailed) as exc_info:
            extract_record(raw)

        assert exc_info.value.raw_text == raw

    def test_integer_over_digit_limit_raises(self):
        raw = '{"carbohydrate": ' + "1" * 5000 + "}"

        with pytest.raises(ExtractionFailed):
            extract_record(raw)

    def test_deep_nesting_raises(self):
        raw = '{"carbohydrate": ' + "[" * 100_000 + "]" * 100_000 + "}"

        with pytest.raises(ExtractionFailed):
            extract_record(raw)
