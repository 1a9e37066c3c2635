"""Data models for the price cache."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssetType(str, Enum):
    STOCK = "stock"
    FOREX = "forex"
    CRYPTO = "crypto"


@dataclass
class AssetEntry:
    """Cached price state for one configured asset.

    ``price`` and ``last_updated`` are both zero until the first successful
    fetch. ``last_updated`` is in milliseconds since the epoch.
    """

    type: AssetType | str
    ticker: str
    price: float = 0.0
    last_updated: int = 0

    def is_fresh(self, now: int, refresh_interval: int) -> bool:
        return self.price != 0 and now < self.last_updated + refresh_interval


@dataclass(frozen=True)
class PriceFetched:
    """Successful refresh."""

    price: float
    fetched_at: int


@dataclass(frozen=True)
class RefreshFailed:
    """Failed refresh; ``error`` is the exception that stopped it."""

    reason: str
    error: Exception


RefreshResult = PriceFetched | RefreshFailed


def type_name(value: AssetType | str) -> str:
    """Plain string form of an asset type, known or not."""
    return value.value if isinstance(value, AssetType) else value
