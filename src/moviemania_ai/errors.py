"""Error taxonomy for AI requests.

Remote failures arrive in several shapes (google.genai APIError with .code,
httpx errors with .response.status_code, plain exceptions tagged with
.status_code). classify() maps all of them onto ErrorKind so the dispatcher
can decide between rotating keys, backing off, or giving up.
"""

from enum import Enum

import httpx


class ErrorKind(Enum):
    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    TRANSIENT = "transient"
    FATAL = "fatal"
    SERVICE_UNAVAILABLE = "service_unavailable"

    def rotates(self) -> bool:
        """Key-local failure: the next client may succeed right away."""
        return self in (ErrorKind.AUTH, ErrorKind.RATE_LIMITED)


_AUTH_STATUSES = (401, 403)
_TRANSIENT_STATUSES = (408, 500, 502, 503, 504)
# Account-wide exhaustion: rotating to another key of the same project won't help
_QUOTA_MARKERS = ("Quota exceeded", "RESOURCE_EXHAUSTED", "RATE_LIMIT_EXCEEDED")


class AIServiceError(Exception):
    """Failure carrying an HTTP-style status and a message safe to show users."""

    kind = ErrorKind.FATAL
    status = 500
    user_message = "AI request failed."

    def __init__(
        self,
        message: str,
        status: int | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        if status is not None:
            self.status = status
        if user_message is not None:
            self.user_message = user_message


class ServiceUnavailableError(AIServiceError):
    kind = ErrorKind.SERVICE_UNAVAILABLE
    status = 503
    user_message = "AI features are disabled on the server. Contact the administrator."


class QuotaExhaustedError(AIServiceError):
    kind = ErrorKind.QUOTA_EXHAUSTED
    status = 429
    user_message = (
        "AI is temporarily unavailable (Gemini quota exceeded). "
        "Try again later or increase your Gemini quota."
    )


class ParseError(AIServiceError, ValueError):
    status = 502
    user_message = "The AI response could not be read. Please try again."


def status_of(exc: BaseException) -> int | None:
    """First integer HTTP status found on the exception, if any."""
    # google.genai uses .code (int) and .status (str, e.g. "RESOURCE_EXHAUSTED")
    for attr in ("status_code", "status", "code"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and not isinstance(val, bool):
            return val
    response = getattr(exc, "response", None)
    val = getattr(response, "status_code", None)
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    return None


def _message_of(exc: BaseException) -> str:
    parts = [str(exc)]
    for attr in ("message", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, str):
            parts.append(val)
    return " ".join(parts)


def is_quota_exhausted(exc: BaseException) -> bool:
    if status_of(exc) != 429:
        return False
    msg = _message_of(exc)
    return any(marker in msg for marker in _QUOTA_MARKERS)


def classify(exc: BaseException) -> ErrorKind:
    if isinstance(exc, AIServiceError):
        return exc.kind
    status = status_of(exc)
    if status is None:
        if isinstance(exc, (httpx.TransportError, TimeoutError)):
            return ErrorKind.TRANSIENT
        return ErrorKind.FATAL
    if is_quota_exhausted(exc):
        return ErrorKind.QUOTA_EXHAUSTED
    if status in _AUTH_STATUSES:
        return ErrorKind.AUTH
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status in _TRANSIENT_STATUSES:
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL
