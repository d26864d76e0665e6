"""
Parse JSON the model was asked to return.

Models often wrap JSON in Markdown code fences despite instructions; strip
them before parsing. Empty or non-JSON output is a retryable user-facing
error, never a crash.
"""

import json
import re
from typing import Any

from sidebar.errors import ModelOutputError

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?```\s*$")

EMPTY_OUTPUT_MESSAGE = "AI returned an empty response. Please try again."
INVALID_OUTPUT_MESSAGE = "AI returned an invalid format. Please try again."


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` / ```json fence and a trailing ``` fence."""
    text = (text or "").strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def parse_model_json(text: str) -> Any:
    """
    Decode model output as JSON.

    Raises:
        ModelOutputError: If the output is empty or not valid JSON
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ModelOutputError(EMPTY_OUTPUT_MESSAGE)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        raise ModelOutputError(INVALID_OUTPUT_MESSAGE)
