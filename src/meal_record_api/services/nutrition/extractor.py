"""Recovery of a JSON record from free-text model replies."""

import json
import logging
import re
from typing import Any

from meal_record_api.agents.prompts.nutrition import UNANSWERABLE_TOKEN

logger = logging.getLogger(__name__)

NARROW_OBJECT = re.compile(r"\{[\s\S]*?\}")
WIDE_OBJECT = re.compile(r"\{[\s\S]*\}")
LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
TRAILING_COMMA = re.compile(r",\s*\}")


class ExtractionFailed(Exception):
    """No JSON object could be recovered from the model reply."""

    def __init__(self, raw_text: str):
        self.raw_text = raw_text
        super().__init__("Invalid JSON format returned by AI")


def is_unanswerable(raw_text: str) -> bool:
    """Whether the model declared the input is not a food."""
    return UNANSWERABLE_TOKEN in raw_text


def _repair(span: str) -> str:
    span = LINE_COMMENT.sub("", span)
    return TRAILING_COMMA.sub("}", span)


def extract_record(raw_text: str) -> dict[str, Any]:
    """
    Extract the first JSON object from a model reply.

    The narrowest ``{...}`` span is tried first with line comments and a
    trailing comma removed. If that does not parse, the widest span (first
    ``{`` to last ``}``) is parsed as-is.

    Args:
        raw_text: Raw reply text

    Returns:
        The decoded object

    Raises:
        ExtractionFailed: If neither span yields a JSON object
    """
    narrow = NARROW_OBJECT.search(raw_text)
    if narrow is None:
        logger.warning("No JSON object in model reply")
        raise ExtractionFailed(raw_text)

    try:
        data = json.loads(_repair(narrow.group(0)))
    except (ValueError, RecursionError) as e:
        logger.debug(f"Narrow span did not parse ({e}), trying wide span")
        wide = WIDE_OBJECT.search(raw_text)
        try:
            data = json.loads(wide.group(0))
        except (ValueError, RecursionError) as e:
            logger.warning(f"Failed to parse model reply: {e}")
            raise ExtractionFailed(raw_text) from e

    if not isinstance(data, dict):
        raise ExtractionFailed(raw_text)
    return data
