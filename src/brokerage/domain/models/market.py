"""Market control domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class MarketControlEntry:
    """
    Admin override for one bucket.

    `paused_at` is stamped on every control mutation, reactivation included,
    so it reads as "last control change".
    """

    bucket: str
    active: bool = True
    price_override: Optional[Decimal] = None
    paused_at: Optional[datetime] = None
