"""
Model-output normalization — pull a JSON document out of chat-completion text.

Models often wrap JSON in markdown fences or add prose around it. The
extraction order is: a ```json fenced block, then any ``` fenced block, then
the whole text.
"""

from __future__ import annotations

import json
import re
from typing import Any

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)```")
_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)```")


class LLMResponseError(ValueError):
    """The model returned nothing usable (empty, or not valid JSON)."""


def extract_json_text(raw: str) -> str:
    """Return the JSON candidate from raw model output, trimmed."""
    match = _JSON_FENCE.search(raw) or _ANY_FENCE.search(raw)
    candidate = match.group(1) if match else raw
    return candidate.strip()


def parse_json_response(raw: str | None) -> Any:
    """Parse model output as JSON. Raises LLMResponseError instead of guessing a default."""
    candidate = extract_json_text(raw or "")
    if not candidate:
        raise LLMResponseError("No JSON found in model response")

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Could not parse model response as JSON: {candidate[:200]}") from e
