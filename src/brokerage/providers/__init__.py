"""External collaborator adapters (quotes, auth)."""

from brokerage.providers.quote_provider import QuoteProvider
from brokerage.providers.stub_provider import StubQuoteProvider
from brokerage.providers.twelvedata_provider import TwelveDataQuoteProvider, QuoteFetchError
from brokerage.providers.auth_provider import JwtAuthProvider

__all__ = [
    "QuoteProvider",
    "StubQuoteProvider",
    "TwelveDataQuoteProvider",
    "QuoteFetchError",
    "JwtAuthProvider",
]
