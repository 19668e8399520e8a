"""Unwrapping JSON objects out of free-text model replies.

Models are asked for raw JSON but regularly wrap it in a Markdown code fence
(```json ... ```) or add a sentence around it. ``unwrap_json`` strips a
leading/trailing fence, then parses; if that fails it retries on the span from
the first ``{`` to the last ``}``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict

from paravault.errors import MalformedPayloadError, MissingPayloadError

LOGGER = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    """Remove one leading and one trailing Markdown code-fence marker."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _OPENING_FENCE.sub("", stripped, count=1)
        stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def unwrap_json(text: str) -> Dict[str, Any]:
    """Return the JSON object carried by a model reply.

    Raises:
        MissingPayloadError: the reply holds no JSON object at all.
        MalformedPayloadError: an object is present but does not parse.
    """
    if not isinstance(text, str) or not text.strip():
        raise MissingPayloadError("Empty model reply")

    body = strip_code_fence(text)
    start, end = body.find("{"), body.rfind("}")
    if start == -1:
        raise MissingPayloadError(f"No JSON object in model reply: {body[:80]!r}")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        if end <= start:
            raise MalformedPayloadError(f"Unterminated JSON object: {body[:80]!r}") from None
        try:
            payload = json.loads(body[start : end + 1])
        except json.JSONDecodeError as exc:
            raise MalformedPayloadError(f"Invalid JSON in model reply: {exc}") from exc
        LOGGER.debug("Recovered JSON object from surrounding text")

    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload
