"""Polygon stock price provider."""
from __future__ import annotations

from typing import Any

from ..errors import ParseFailure
from .decode import field, to_price

POLYGON_URL = (
    "https://api.polygon.io/v2/aggs/ticker/TICKER/prev?unadjusted=true&apiKey={key}"
)


class PolygonProvider:
    """Volume-weighted average price of the previous day's aggregate bar."""

    def __init__(self, api_key: str) -> None:
        self.template = POLYGON_URL.format(key=api_key)

    def build_url(self, ticker: str) -> str:
        return self.template.replace("TICKER", ticker, 1)

    def parse(self, body: Any, ticker: str) -> float:
        results = field(body, "results", "results")
        if not isinstance(results, list):
            raise ParseFailure(f"results is not a list: {results!r}")
        bar = field(results, 0, "results[0]")
        return to_price(field(bar, "vw", "results[0].vw"), "results[0].vw", allow_str=True)
