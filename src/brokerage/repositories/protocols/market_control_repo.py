"""Market control repository protocol."""

from typing import Protocol, Optional

from brokerage.domain.models import MarketControlEntry


class MarketControlRepository(Protocol):
    """Interface for per-bucket market control entries."""

    def get(self, bucket: str) -> Optional[MarketControlEntry]:
        """Retrieve the control entry for a bucket."""
        ...

    def list_all(self) -> list[MarketControlEntry]:
        """List all control entries."""
        ...

    def upsert(self, entry: MarketControlEntry) -> MarketControlEntry:
        """Insert or update the entry keyed by bucket."""
        ...
