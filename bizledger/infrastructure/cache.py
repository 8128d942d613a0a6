"""In-process TTL cache for engine results, keyed by user, parameters and data fingerprint"""

import functools
import hashlib
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Hashable, Iterable, Optional, Tuple

from bizledger.config import settings
from bizledger.domain.models import Transaction
from bizledger.infrastructure.observability.metrics import cache_request_counter


def fingerprint(transactions: Iterable[Transaction]) -> str:
    """Stable digest of a transaction snapshot"""
    digest = hashlib.sha256()
    for txn in transactions:
        digest.update(repr(txn).encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


class ResultCache:
    """
    Bounded mapping with per-entry expiry.

    Keys are tuples whose first two items are (namespace, user_id) so that
    everything cached for a user can be dropped when their data changes.
    Oldest entries are evicted first once max_entries is reached.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[Tuple[Hashable, ...], Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Tuple[Hashable, ...]) -> Tuple[bool, Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return False, None
            return True, value

    def set(self, key: Tuple[Hashable, ...], value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def invalidate_user(self, user_id: str) -> int:
        """Drop every entry cached for a user, returning how many were removed"""
        with self._lock:
            stale = [key for key in self._entries if key[1] == user_id]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


result_cache = ResultCache(settings.cache_ttl_seconds, settings.cache_max_entries)


def cached(namespace: str, cache: Optional[ResultCache] = None):
    """
    Memoize an engine call of the form func(user_id, transactions, *params).

    The engine function itself stays pure; the cache only sees its result.
    Exceptions are not cached.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(user_id: str, transactions, *params):
            store = cache if cache is not None else result_cache
            key = (namespace, user_id, params, fingerprint(transactions))

            found, value = store.get(key)
            if found:
                cache_request_counter.labels(result="hit").inc()
                return value

            cache_request_counter.labels(result="miss").inc()
            value = func(user_id, transactions, *params)
            store.set(key, value)
            return value

        return wrapper

    return decorator
