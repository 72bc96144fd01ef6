"""Stub quote provider for offline/testing use."""

import random
import threading
from decimal import Decimal


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "MSFT": Decimal("378.25"),
    "GOOGL": Decimal("142.75"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "THYAO": Decimal("287.00"),
    "GARAN": Decimal("112.40"),
    "BTC/USD": Decimal("64250.00"),
    "ETH/USD": Decimal("3120.50"),
    "USD/TRY": Decimal("32.4150"),
    "EUR/USD": Decimal("1.0845"),
    "XAU/USD": Decimal("2335.60"),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; unknown symbols get a random
    price that stays fixed for the life of the provider.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated: dict[str, Decimal] = {}
        self._lock = threading.Lock()

    def get_price(self, symbol: str) -> Decimal:
        """Return a stub price for `symbol`."""
        key = symbol.upper()
        if key in _STUB_PRICES:
            return _STUB_PRICES[key]

        with self._lock:
            if key not in self._generated:
                base_price = Decimal(str(50 + self._rng.random() * 200))
                self._generated[key] = base_price.quantize(Decimal("0.01"))
            return self._generated[key]

    def close(self) -> None:
        pass
