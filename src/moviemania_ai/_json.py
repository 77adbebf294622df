"""Recover a JSON value from free-form model output."""

import json
import re

from moviemania_ai.errors import ParseError

_FENCE_RE = re.compile(r"```(?:json)?")


def clean_json(text: str):
    """Parse `text` as JSON, tolerating code fences and surrounding prose.

    Falls back to the span from the first '{' or '[' (whichever comes first)
    to the LAST matching closer. Stray braces in the prose around the payload
    can therefore break extraction; no balanced scan is attempted.
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected text from AI response, got {type(text).__name__}")

    try:
        return json.loads(_FENCE_RE.sub("", text).strip())
    except json.JSONDecodeError:
        pass

    first_brace = text.find("{")
    first_bracket = text.find("[")
    if first_brace != -1 and (first_bracket == -1 or first_brace < first_bracket):
        start, end = first_brace, text.rfind("}")
    elif first_bracket != -1:
        start, end = first_bracket, text.rfind("]")
    else:
        start = end = -1

    if start != -1 and end != -1:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    raise ParseError(f"Failed to parse JSON from AI response: {text[:100]}...")
