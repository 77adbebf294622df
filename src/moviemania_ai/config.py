"""Environment-driven settings.

Usage:
    GEMINI_API_KEYS=key1,key2,key3   # preferred, rotated per request
    GEMINI_API_KEY=key               # legacy single key
    GEMINI_MODEL=gemini-2.5-flash
    AI_MAX_RETRIES=3
    AI_CACHE=0                       # disable the on-disk response cache
    LLM_CACHE_DIR=/tmp/llm_cache
"""

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_RETRIES = 3

_FALSY = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    api_keys: str = ""
    legacy_api_key: str = ""
    model: str = DEFAULT_MODEL
    max_retries: int = DEFAULT_MAX_RETRIES
    cache: bool = True


def _int_env(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env=None) -> Settings:
    """Read settings from `env` (defaults to os.environ)."""
    env = os.environ if env is None else env
    max_retries = _int_env(env, "AI_MAX_RETRIES", DEFAULT_MAX_RETRIES)
    if max_retries < 1:
        raise ValueError(f"AI_MAX_RETRIES must be >= 1, got {max_retries}")
    return Settings(
        api_keys=env.get("GEMINI_API_KEYS", ""),
        legacy_api_key=env.get("GEMINI_API_KEY", ""),
        model=env.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
        max_retries=max_retries,
        cache=env.get("AI_CACHE", "1").strip().lower() not in _FALSY,
    )
