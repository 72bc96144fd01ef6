"""Per-bucket quote cache in front of the external quote provider."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from brokerage.core.timezone import now_utc
from brokerage.core.exceptions import MarketPausedError, UnknownBucketError
from brokerage.domain.markets import MARKET_BUCKETS
from brokerage.domain.models import MarketControlEntry
from brokerage.domain.views import QuoteLine, QuoteBatch
from brokerage.providers.quote_provider import QuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30
DEFAULT_MAX_SYMBOLS = 15
DEFAULT_FETCH_WORKERS = 5


class QuoteCache:
    """
    Caches one QuoteBatch per bucket for `ttl_seconds`.

    - A paused bucket fails with MarketPausedError before the cache is read.
    - Only the first `max_symbols` symbols of a bucket are priced per refresh.
    - A bucket's price override replaces provider calls for all its symbols.
    - A failing symbol becomes an inline `error` line; the batch never aborts.
    - At most one refresh runs per bucket; concurrent readers wait for it and
      then get its result.
    - `invalidate()` drops the entry, and a refresh that was already running
      when it was called does not store its (stale) result.

    The clock and provider are injected so the cache holds no hidden state.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        buckets: Mapping[str, Sequence[str]] = MARKET_BUCKETS,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_symbols: int = DEFAULT_MAX_SYMBOLS,
        max_workers: int = DEFAULT_FETCH_WORKERS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._provider = provider
        self._buckets = buckets
        self._ttl = ttl_seconds
        self._max_symbols = max_symbols
        self._max_workers = max(1, max_workers)
        self._clock = clock

        self._entries: dict[str, QuoteBatch] = {}
        self._generations: dict[str, int] = {}
        self._refresh_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    @property
    def buckets(self) -> Mapping[str, Sequence[str]]:
        return self._buckets

    def get_quotes(
        self,
        bucket: str,
        control: Optional[MarketControlEntry] = None,
    ) -> QuoteBatch:
        """
        Return quotes for `bucket`, refreshing when missing or expired.

        Args:
            bucket: Bucket name from the registry
            control: The bucket's market control entry, if one exists
        """
        if control is not None and not control.active:
            raise MarketPausedError(bucket)
        if bucket not in self._buckets:
            raise UnknownBucketError(bucket)

        cached = self._fresh_entry(bucket)
        if cached is not None:
            return cached

        with self._refresh_lock(bucket):
            # Another reader may have refreshed while we waited
            cached = self._fresh_entry(bucket)
            if cached is not None:
                return cached

            with self._lock:
                generation = self._generations.get(bucket, 0)

            batch = self._refresh(bucket, control)

            with self._lock:
                if self._generations.get(bucket, 0) == generation:
                    self._entries[bucket] = batch
                else:
                    logger.debug("Discarding refresh of %s invalidated mid-flight", bucket)
            return batch

    def invalidate(self, bucket: str) -> None:
        """Drop the cached entry so the next read recomputes."""
        with self._lock:
            self._entries.pop(bucket, None)
            self._generations[bucket] = self._generations.get(bucket, 0) + 1

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            for bucket in set(self._entries) | set(self._refresh_locks):
                self._generations[bucket] = self._generations.get(bucket, 0) + 1
            self._entries.clear()

    def close(self) -> None:
        """Drop every cached entry and close the provider."""
        self.clear()
        self._provider.close()

    def _fresh_entry(self, bucket: str) -> Optional[QuoteBatch]:
        with self._lock:
            entry = self._entries.get(bucket)
        if entry is None:
            return None
        age = (self._clock() - entry.as_of).total_seconds()
        if age < self._ttl:
            return entry
        return None

    def _refresh_lock(self, bucket: str) -> threading.Lock:
        with self._lock:
            lock = self._refresh_locks.get(bucket)
            if lock is None:
                lock = self._refresh_locks[bucket] = threading.Lock()
            return lock

    def _refresh(self, bucket: str, control: Optional[MarketControlEntry]) -> QuoteBatch:
        symbols = list(self._buckets[bucket])[: self._max_symbols]
        override = control.price_override if control is not None else None

        if override is not None:
            lines = [QuoteLine(symbol=symbol, price=override) for symbol in symbols]
        else:
            workers = min(self._max_workers, len(symbols)) or 1
            with ThreadPoolExecutor(max_workers=workers) as pool:
                lines = list(pool.map(self._fetch_line, symbols))

        failed = sum(1 for line in lines if not line.ok)
        logger.debug("Refreshed %s: %d symbols, %d failed", bucket, len(lines), failed)
        return QuoteBatch(bucket=bucket, as_of=self._clock(), quotes=tuple(lines))

    def _fetch_line(self, symbol: str) -> QuoteLine:
        try:
            return QuoteLine(symbol=symbol, price=self._provider.get_price(symbol))
        except Exception as exc:  # per-symbol isolation: report inline, keep the batch
            logger.warning("Quote for %s failed: %s", symbol, exc)
            message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
            return QuoteLine(symbol=symbol, error=message)
