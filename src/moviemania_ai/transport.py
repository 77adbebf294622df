"""Helpers for the HTTP route layer that fronts GeminiService."""

import re

from moviemania_ai.errors import status_of

KEY_INDEX_HEADER = "X-AI-Key-Index"

_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")


def parse_key_index(raw) -> int | None:
    """Header value -> key index hint. Leading digits count: '12abc' -> 12."""
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    m = _INT_PREFIX_RE.match(str(raw))
    return int(m.group(1)) if m else None


def key_index_from_headers(headers) -> int | None:
    """Look up the hint in a headers mapping, case-insensitively."""
    for name, value in headers.items():
        if name.lower() == KEY_INDEX_HEADER.lower():
            return parse_key_index(value)
    return None


def error_response(exc: BaseException, fallback_message: str) -> tuple[int, str]:
    """(status, user-facing message) for a failed AI call.

    Diagnostic text never reaches the user; errors without a user_message
    get `fallback_message`.
    """
    status = status_of(exc) or 503
    message = getattr(exc, "user_message", None) or fallback_message
    return status, message
