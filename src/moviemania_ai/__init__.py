"""AI review assistant for the movie/TV tracker, backed by Gemini.

Key rotation and retries:
  - GEMINI_API_KEYS=key1,key2,key3 builds one client per key
  - calls take turns across keys unless pinned with preferred_key_index
  - auth errors and per-key 429s move on to the next key immediately
  - 5xx/408 back off (1s, 2s, 4s ... capped at 8s) and sweep the pool again
  - account-wide quota exhaustion fails fast with QuotaExhaustedError

Usage:
    from moviemania_ai import GeminiService, run_sync
    ai = GeminiService()
    run_sync(ai.generate_review_draft("Inception", 4, ["Sci-Fi"]))
    # "A dizzying, clever ..."
    run_sync(ai.analyze_sentiment("Loved it", preferred_key_index=7))
    # {"sentiment": "positive", "score": 92, "keyPhrases": [...]}
"""

from moviemania_ai._json import clean_json
from moviemania_ai.config import Settings, load_settings
from moviemania_ai.dispatcher import Dispatcher, backoff_delay
from moviemania_ai.errors import (
    AIServiceError,
    ErrorKind,
    ParseError,
    QuotaExhaustedError,
    ServiceUnavailableError,
    classify,
)
from moviemania_ai.providers._pool import ClientPool
from moviemania_ai.service import GeminiService, run_sync

__all__ = [
    "AIServiceError",
    "ClientPool",
    "Dispatcher",
    "ErrorKind",
    "GeminiService",
    "ParseError",
    "QuotaExhaustedError",
    "ServiceUnavailableError",
    "Settings",
    "backoff_delay",
    "classify",
    "clean_json",
    "load_settings",
    "run_sync",
]
