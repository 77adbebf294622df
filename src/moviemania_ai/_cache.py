"""On-disk response cache shared by all generate() calls."""

import hashlib
import json
import logging
import os
from pathlib import Path

for name in ("httpx", "google_genai", "google_genai.models"):
    logging.getLogger(name).setLevel(logging.WARNING)

_cache_dir = os.environ.get("LLM_CACHE_DIR") or "/tmp/llm_cache"


class _LazyCache:
    """Lazy-initialized FanoutCache (no disk access until the first lookup)."""

    def __init__(self, directory: str):
        self._directory = directory
        self._cache = None

    def _ensure(self):
        if self._cache is None:
            from diskcache import FanoutCache

            self._cache = FanoutCache(str(Path(self._directory) / "gemini"), shards=8)

    def get(self, key):
        self._ensure()
        return self._cache.get(key)

    def set(self, key, value):
        self._ensure()
        return self._cache.set(key, value)


direct_cache = _LazyCache(_cache_dir)


def cache_key(model: str, prompt: str, config: dict) -> str:
    blob = json.dumps(
        {"model": model, "prompt": prompt, "config": config},
        sort_keys=True,
    )
    return hashlib.sha256(blob.encode()).hexdigest()
