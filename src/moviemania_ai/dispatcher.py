"""Key rotation and retry policy for AI requests.

One logical call runs up to max_retries rounds. Each round walks the pool in
rotation order:
  - auth / per-key 429: try the next key immediately
  - quota exhausted:    give up at once (account-wide, rotation can't help)
  - transient 5xx/408:  abandon the round, back off, sweep again
  - anything else:      raise as-is
"""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable

from moviemania_ai.config import DEFAULT_MAX_RETRIES
from moviemania_ai.errors import (
    ErrorKind,
    QuotaExhaustedError,
    ServiceUnavailableError,
    classify,
)
from moviemania_ai.providers._pool import ClientPool

log = logging.getLogger(__name__)

_BASE_DELAY = 1.0  # seconds
_MAX_DELAY = 8.0
_MAX_JITTER = 0.5

Operation = Callable[[Any], Awaitable[Any]]


def backoff_delay(attempt: int) -> float:
    """Delay after zero-based round `attempt`: 1s, 2s, 4s ... plus jitter, max 8s."""
    return min(_MAX_DELAY, _BASE_DELAY * (2**attempt) + random.random() * _MAX_JITTER)


class Dispatcher:
    def __init__(self, pool: ClientPool, sleep=asyncio.sleep):
        self.pool = pool
        self._sleep = sleep

    @property
    def has_ai(self) -> bool:
        return len(self.pool) > 0

    async def execute(
        self,
        operation: Operation,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        preferred_key_index=None,
    ):
        """Run `operation(client)` until one client succeeds.

        Raises ServiceUnavailableError for an empty pool, QuotaExhaustedError
        on account-wide quota exhaustion, otherwise the remote error itself.
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")
        if not self.has_ai:
            raise ServiceUnavailableError("AI service not initialized")

        last_error = None
        for attempt in range(max_retries):
            final_round = attempt == max_retries - 1
            for idx in self.pool.client_order(preferred_key_index):
                try:
                    return await operation(self.pool[idx])
                except Exception as e:
                    last_error = e
                    kind = classify(e)
                    if kind is ErrorKind.QUOTA_EXHAUSTED:
                        raise QuotaExhaustedError("Gemini quota exceeded") from e
                    if kind.rotates():
                        log.debug("Key %d failed (%s), trying next", idx, kind.value)
                        continue
                    if kind is ErrorKind.TRANSIENT and not final_round:
                        log.debug("Key %d hit a transient error: %s", idx, e)
                        break
                    raise

            if not final_round:
                delay = backoff_delay(attempt)
                log.warning(
                    "Gemini request retrying in %.1fs (round %d/%d)",
                    delay,
                    attempt + 1,
                    max_retries,
                )
                await self._sleep(delay)

        raise last_error
