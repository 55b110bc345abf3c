"""ReplyParsingPolicy — turn the model's text answer into a JSON value."""

from __future__ import annotations

import json
import re
from typing import Any

from querydesk.domain.errors import MalformedClassification

# Matches an opening ```json fence (with its newline) or a closing ``` fence
# (with the newline before it). Bare ``` openers are caught by the second arm.
_FENCE_RE = re.compile(r"```json\n?|\n?```")


def strip_code_fence(reply: str) -> str:
    """Remove markdown code fences and surrounding whitespace."""
    return _FENCE_RE.sub("", reply.strip()).strip()


def _reject_constant(name: str):
    # NaN / Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_model_reply(reply: str) -> Any:
    """Parse the model's reply as JSON after stripping code fences.

    The parsed value is returned as-is: no check that the keys exist or
    that the values fall within the documented enumerations.

    Raises:
        MalformedClassification: if the stripped text is not valid JSON.
    """
    cleaned = strip_code_fence(reply)
    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as e:
        raise MalformedClassification() from e
