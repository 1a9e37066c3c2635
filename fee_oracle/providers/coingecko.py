"""CoinGecko crypto price provider."""
from __future__ import annotations

from typing import Any

from .decode import field, to_price

COINGECKO_URL = (
    "https://api.coingecko.com/api/v3/coins/TICKER"
    "?localization=false&tickers=false&market_data=true"
    "&community_data=false&developer_data=false&sparkline=false"
)


class CoinGeckoProvider:
    """Coin price from ``market_data.current_price`` keyed by lower-cased quote."""

    def __init__(self, quote_ticker: str) -> None:
        self.template = COINGECKO_URL
        self._quote_key = quote_ticker.lower()

    def build_url(self, ticker: str) -> str:
        return self.template.replace("TICKER", ticker, 1)

    def parse(self, body: Any, ticker: str) -> float:
        market_data = field(body, "market_data", "market_data")
        current = field(market_data, "current_price", "market_data.current_price")
        where = f"market_data.current_price.{self._quote_key}"
        return to_price(field(current, self._quote_key, where), where)
