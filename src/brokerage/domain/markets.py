"""Static registry of tradable symbol buckets."""

from types import MappingProxyType
from typing import Mapping, Sequence

MARKET_BUCKETS: Mapping[str, Sequence[str]] = MappingProxyType(
    {
        "bist": (
            "THYAO", "GARAN", "AKBNK", "ASELS", "BIMAS", "EREGL",
            "KCHOL", "SAHOL", "SISE", "TUPRS", "YKBNK", "ISCTR",
            "PETKM", "FROTO", "TOASO", "TCELL", "KOZAL", "PGSUS",
        ),
        "us": ("AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "NVDA", "META"),
        "crypto": ("BTC/USD", "ETH/USD", "SOL/USD", "XRP/USD", "AVAX/USD"),
        "fx": ("USD/TRY", "EUR/TRY", "EUR/USD", "GBP/USD"),
        "commodities": ("XAU/USD", "XAG/USD"),
    }
)
