"""Round-robin client pool for API key rotation.

Usage:
    GEMINI_API_KEYS=key1,key2,key3

Calls without a preferred index take turns starting from the next key;
calls with one always start at that key (session affinity). Either way a
call visits every key once per round via client_order().
"""

import math
import threading


class ClientPool:
    """Ordered, read-only list of clients plus a shared rotation cursor.

    An empty pool is allowed: the dispatcher reports the service as
    unavailable instead of failing at startup.
    """

    def __init__(self, clients: list):
        self._clients = list(clients)
        self._idx = 0
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._clients)

    def __getitem__(self, index: int):
        return self._clients[index]

    @property
    def cursor(self) -> int:
        return self._idx

    def normalize_index(self, value) -> int | None:
        """Map an arbitrary index hint into [0, len(pool)), or None if unusable."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = int(value.strip(), 10)
            except ValueError:
                return None
        elif isinstance(value, float):
            if not math.isfinite(value):
                return None
            value = int(value)
        elif not isinstance(value, int):
            return None
        if not self._clients:
            return None
        # Python's % already wraps negatives into [0, n)
        return value % len(self._clients)

    def client_order(self, preferred=None) -> list[int]:
        """Indices to try, in rotation order from the resolved start.

        Only unpinned calls advance the cursor.
        """
        n = len(self._clients)
        if n == 0:
            return []
        start = self.normalize_index(preferred)
        if start is None:
            with self._lock:
                start = self._idx % n
                self._idx = (start + 1) % n
        return [(start + i) % n for i in range(n)]
