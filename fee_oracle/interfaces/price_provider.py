"""Price provider protocol — one external price source per asset type."""
from typing import Any, Protocol


class PriceProvider(Protocol):
    """Builds request URLs for a source and decodes its responses."""

    def build_url(self, ticker: str) -> str: ...

    def parse(self, body: Any, ticker: str) -> float: ...
