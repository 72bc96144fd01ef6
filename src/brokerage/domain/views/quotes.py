"""View models for quote outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class QuoteLine:
    """Price for one symbol, or the reason it could not be fetched."""

    symbol: str
    price: Optional[Decimal] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class QuoteBatch:
    """Quotes for a bucket as of one refresh."""

    bucket: str
    as_of: datetime
    quotes: tuple[QuoteLine, ...] = field(default_factory=tuple)
