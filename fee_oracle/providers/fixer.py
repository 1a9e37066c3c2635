"""Fixer forex rate provider.

Fixer quotes every rate against EUR, so the price of ``ticker`` in the quote
currency is ``rates[quote] / rates[ticker]``.
"""
from __future__ import annotations

from typing import Any

from ..errors import ParseFailure
from .decode import field, to_price

FIXER_URL = "http://data.fixer.io/api/latest?access_key={key}&symbols=TICKER,{quote}"


class FixerProvider:
    """Cross rate of ``ticker`` against the quote currency via EUR."""

    def __init__(self, api_key: str, quote_ticker: str) -> None:
        self.template = FIXER_URL.format(key=api_key, quote=quote_ticker)
        self._quote = quote_ticker

    def build_url(self, ticker: str) -> str:
        return self.template.replace("TICKER", ticker, 1)

    def parse(self, body: Any, ticker: str) -> float:
        if isinstance(body, dict) and body.get("success") is False:
            error = body.get("error") or {}
            raise ParseFailure(
                f"fixer error {error.get('code', '?')}: "
                f"{error.get('info') or error.get('type') or 'unknown'}"
            )

        rates = field(body, "rates", "rates")
        quote_rate = to_price(
            field(rates, self._quote, f"rates.{self._quote}"), f"rates.{self._quote}"
        )
        asset_rate = to_price(field(rates, ticker, f"rates.{ticker}"), f"rates.{ticker}")
        if asset_rate == 0:
            raise ParseFailure(f"rates.{ticker} is zero")
        return quote_rate / asset_rate
