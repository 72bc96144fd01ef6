"""Quote provider protocol."""

from decimal import Decimal
from typing import Protocol


class QuoteProvider(Protocol):
    """
    Protocol for external price sources.

    Implementations return a single price per call and raise on any failure;
    the quote cache isolates those failures per symbol.
    """

    def get_price(self, symbol: str) -> Decimal:
        """Return the latest price for `symbol` or raise."""
        ...

    def close(self) -> None:
        """Release any connections held by the provider."""
        ...
