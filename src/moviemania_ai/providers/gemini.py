"""Gemini clients via the native google.genai SDK."""

import logging

from moviemania_ai import _cache
from moviemania_ai.config import Settings
from moviemania_ai.providers._pool import ClientPool

log = logging.getLogger(__name__)


def parse_key_list(value) -> list[str]:
    """'k1, k2,,k1' -> ['k1', 'k2'] (trimmed, empties dropped, first wins)."""
    if not value or not isinstance(value, str):
        return []
    keys = [k.strip() for k in value.split(",")]
    return list(dict.fromkeys(k for k in keys if k))


def resolve_keys(api_keys: str, legacy_api_key: str = "") -> list[str]:
    """GEMINI_API_KEYS wins; GEMINI_API_KEY is the single-key fallback."""
    keys = parse_key_list(api_keys)
    if not keys and legacy_api_key and legacy_api_key.strip():
        keys = [legacy_api_key.strip()]
    return keys


def _genai_client(api_key: str):
    import google.genai as genai

    return genai.Client(api_key=api_key)


def create_pool(settings: Settings, client_factory=None) -> ClientPool:
    """One client per configured key. Never raises on missing keys."""
    factory = client_factory or _genai_client
    keys = resolve_keys(settings.api_keys, settings.legacy_api_key)
    pool = ClientPool([factory(k) for k in keys])
    if not len(pool):
        log.warning("GEMINI_API_KEY(S) not set. AI features will be disabled.")
    return pool


def model_id(model: str) -> str:
    """'gemini/gemini-2.5-flash' -> 'gemini-2.5-flash'"""
    return model.removeprefix("gemini/")


async def generate(
    client, model: str, prompt: str, cache: bool = True, postprocess=None
):
    """One remote call. Returns (value, usage: dict).

    `postprocess(text)` shapes the reply (e.g. clean_json); a reply is only
    cached once it has passed postprocess, so a bad reply is never replayed.
    Errors from the SDK propagate untouched; the dispatcher classifies them.
    """
    shape = postprocess or (lambda text: text)
    mid = model_id(model)
    key = _cache.cache_key(mid, prompt, {})
    if cache:
        cached = _cache.direct_cache.get(key)
        if cached is not None:
            return shape(cached), {}

    response = await client.aio.models.generate_content(model=mid, contents=prompt)
    text = response.text or ""

    usage = {}
    meta = getattr(response, "usage_metadata", None)
    if meta:
        usage["input_tokens"] = meta.prompt_token_count or 0
        usage["output_tokens"] = meta.candidates_token_count or 0

    value = shape(text)
    if cache and text:
        _cache.direct_cache.set(key, text)
    return value, usage
