"""HTTP quote provider backed by the Twelve Data `/price` endpoint."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from brokerage.core.exceptions import UnavailableError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.twelvedata.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class QuoteFetchError(Exception):
    """A single symbol could not be priced."""


class TwelveDataQuoteProvider:
    """
    Fetches one price per request with a bounded timeout.

    A missing API key is a configuration problem and raises UnavailableError
    on every call; transport errors, non-2xx responses and bodies without a
    usable `price` raise QuoteFetchError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_seconds)

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    def get_price(self, symbol: str) -> Decimal:
        if not self._api_key:
            raise UnavailableError("MARKET_API_KEY is required for live quotes")

        try:
            response = self._client.get(
                f"{self._base_url}/price",
                params={"symbol": symbol, "apikey": self._api_key},
            )
        except httpx.HTTPError as exc:
            logger.warning("Quote request failed for %s: %s", symbol, exc)
            raise QuoteFetchError(f"Price request failed: {exc}") from exc

        if response.status_code >= 400:
            raise QuoteFetchError(f"Price request failed with HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise QuoteFetchError("Invalid price response") from exc

        raw_price = data.get("price") if isinstance(data, dict) else None
        if not raw_price:
            raise QuoteFetchError("Invalid price response")
        try:
            return Decimal(str(raw_price))
        except InvalidOperation as exc:
            raise QuoteFetchError(f"Invalid price value: {raw_price!r}") from exc

    def close(self) -> None:
        self._client.close()
