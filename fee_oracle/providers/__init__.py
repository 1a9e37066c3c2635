"""Price providers keyed by asset type."""
from __future__ import annotations

from typing import Any

from ..config import OracleConfig
from ..interfaces.price_provider import PriceProvider
from ..models import AssetType, type_name
from .coingecko import CoinGeckoProvider
from .fixer import FixerProvider
from .polygon import PolygonProvider


def build_providers(config: OracleConfig) -> dict[str, PriceProvider]:
    """Build one provider per asset type from credentials and the quote ticker."""
    return {
        AssetType.CRYPTO.value: CoinGeckoProvider(config.quote_ticker),
        AssetType.FOREX.value: FixerProvider(
            config.providers.fixer_api_key, config.quote_ticker
        ),
        AssetType.STOCK.value: PolygonProvider(config.providers.polygon_api_key),
    }


def parse_response(
    providers: dict[str, PriceProvider], asset_type: AssetType | str, body: Any, ticker: str
) -> float:
    """Decode ``body`` with the provider for ``asset_type``; 0.0 if there is none."""
    provider = providers.get(type_name(asset_type))
    if provider is None:
        return 0.0
    return provider.parse(body, ticker)


__all__ = [
    "CoinGeckoProvider",
    "FixerProvider",
    "PolygonProvider",
    "build_providers",
    "parse_response",
]
