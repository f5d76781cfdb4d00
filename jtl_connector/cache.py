"""In-process cache-aside store with TTL expiry and single-flight computation."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List


logger = logging.getLogger("jtl_connector.cache")


@dataclass
class CacheEntry:
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class TTLCache:
    """Get-or-compute cache shared by all lookups in the process.

    A live entry is returned without calling the producer. On a miss, the
    first caller starts one task that runs the producer; concurrent callers
    for the same key await that task instead of starting their own. The
    producer's result is stored before any waiter resumes, including None,
    which is cached like any other value. A producer exception is re-raised
    to every waiter and nothing is stored.

    Must be used from a single event loop.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Task] = {}

    async def get_or_compute(
        self,
        key: str,
        ttl: float,
        producer: Callable[[], Awaitable[Any]],
    ) -> Any:
        entry = self._entries.get(key)
        if entry is not None and not entry.is_expired(self._clock()):
            logger.debug("Cache hit key=%s", key)
            return entry.value

        task = self._inflight.get(key)
        if task is None:
            logger.debug("Cache miss key=%s", key)
            task = asyncio.ensure_future(self._compute(key, ttl, producer))
            self._inflight[key] = task
        else:
            logger.debug("Cache miss key=%s, joining in-flight computation", key)

        # shield: one cancelled waiter must not cancel the others' computation
        return await asyncio.shield(task)

    async def _compute(
        self,
        key: str,
        ttl: float,
        producer: Callable[[], Awaitable[Any]],
    ) -> Any:
        try:
            value = await producer()
            self._cleanup_expired()
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)
            return value
        finally:
            self._inflight.pop(key, None)

    def _cleanup_expired(self) -> None:
        now = self._clock()
        expired: List[str] = [k for k, e in self._entries.items() if e.is_expired(now)]
        for k in expired:
            self._entries.pop(k, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and not entry.is_expired(self._clock())
