"""Market data service: bucket quotes and admin market control."""

import logging
from decimal import Decimal
from typing import Optional

from brokerage.core.timezone import now_utc
from brokerage.core.money import PRICE_SCALE
from brokerage.core.exceptions import ValidationError, NotFoundError
from brokerage.domain.models import MarketControlEntry
from brokerage.domain.views import QuoteBatch
from brokerage.repositories.protocols import MarketControlRepository, UnitOfWork
from brokerage.services.quote_cache import QuoteCache
from brokerage.services.trade_executor import to_decimal

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Reads quotes through the shared QuoteCache, applying the bucket's
    persisted control entry, and owns control updates.

    Every control update invalidates that bucket's cache entry so a pause or
    a new override takes effect on the next read.
    """

    def __init__(
        self,
        quote_cache: QuoteCache,
        control_repo: MarketControlRepository,
        uow: UnitOfWork,
    ):
        self._quote_cache = quote_cache
        self._control_repo = control_repo
        self._uow = uow

    def list_buckets(self) -> dict[str, list[str]]:
        """Return the bucket registry as bucket -> symbols."""
        return {bucket: list(symbols) for bucket, symbols in self._quote_cache.buckets.items()}

    def get_quotes(self, bucket: str) -> QuoteBatch:
        """Quotes for a bucket, honouring pause and price override."""
        control = self._control_repo.get(bucket)
        return self._quote_cache.get_quotes(bucket, control)

    def set_control(
        self,
        bucket: str,
        active: bool,
        price_override=None,
    ) -> MarketControlEntry:
        """
        Upsert the control entry for `bucket`.

        `paused_at` is stamped on every update, reactivation included.
        """
        if not bucket or not bucket.strip():
            raise ValidationError("bucket is required")
        override: Optional[Decimal] = None
        if price_override is not None:
            override = to_decimal(price_override, "price_override", PRICE_SCALE)
            if override < 0:
                raise ValidationError("price_override must be >= 0")

        entry = MarketControlEntry(
            bucket=bucket.strip(),
            active=bool(active),
            price_override=override,
            paused_at=now_utc(),
        )
        with self._uow:
            saved = self._control_repo.upsert(entry)
        self._quote_cache.invalidate(saved.bucket)
        logger.info(
            "Market control %s: active=%s override=%s",
            saved.bucket, saved.active, saved.price_override,
        )
        return saved

    def get_control(self, bucket: str) -> MarketControlEntry:
        control = self._control_repo.get(bucket)
        if control is None:
            raise NotFoundError("Market control", bucket)
        return control

    def list_controls(self) -> list[MarketControlEntry]:
        return self._control_repo.list_all()
