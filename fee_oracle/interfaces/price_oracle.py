"""Price oracle protocol — price lookup abstraction."""
from typing import Protocol


class PriceOracle(Protocol):
    """Abstract interface for looking up an asset's price in the quote currency."""

    async def get_price(self, asset: str) -> float: ...
