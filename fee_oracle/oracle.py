"""Cached asset price lookup in the configured quote currency."""
from __future__ import annotations

import asyncio
import logging
import ssl
import time
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any

import aiohttp
import certifi

from .config import OracleConfig
from .errors import ConfigurationError, NetworkFailure, ParseFailure
from .models import (
    AssetEntry,
    AssetType,
    PriceFetched,
    RefreshFailed,
    RefreshResult,
    type_name,
)
from .providers import build_providers, parse_response

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _asset_type(value: str) -> AssetType | str:
    try:
        return AssetType(value)
    except ValueError:
        return value


class PriceOracle:
    """Price of each configured asset in the quote currency, refreshed when stale.

    Prices are cached per asset for ``refresh_interval_ms``. ``get_price``
    never raises: on any refresh failure it returns the last known price,
    which is 0 if the asset was never fetched.

    The oracle owns one persistent ``aiohttp.ClientSession``. Use it as an
    async context manager, or call ``start()`` and ``close()`` explicitly.
    """

    def __init__(
        self,
        config: OracleConfig,
        session: aiohttp.ClientSession | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.quote_ticker = config.quote_ticker
        self.refresh_interval = config.refresh_interval_ms
        self.request_timeout = config.request_timeout
        self.single_flight = config.single_flight
        self._providers = build_providers(config)
        self._clock = clock or _now_ms
        self._session = session
        self._owns_session = session is None
        self._locks: dict[str, asyncio.Lock] = {}

        self._entries: dict[str, AssetEntry] = {}
        for asset, asset_cfg in config.assets.items():
            self._entries[asset] = AssetEntry(
                type=_asset_type(asset_cfg.type), ticker=asset_cfg.ticker
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> aiohttp.ClientSession:
        """Open the shared HTTP session if none was supplied, and return it."""
        if self._session is not None:
            return self._session
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.request_timeout),
        )
        self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this oracle opened it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> PriceOracle:
        await self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Cache inspection
    # ------------------------------------------------------------------

    @property
    def assets(self) -> list[str]:
        return list(self._entries)

    def entry(self, asset: str) -> AssetEntry | None:
        """Return a copy of the cached entry for ``asset``."""
        entry = self._entries.get(asset)
        return replace(entry) if entry is not None else None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def get_price(self, asset: str) -> float:
        """Return the price of ``asset`` in the quote currency."""
        if asset == self.quote_ticker:
            return 1.0

        # No price source configured: treat as 1:1.
        entry = self._entries.get(asset)
        if entry is None:
            return 1.0

        if entry.is_fresh(self._clock(), self.refresh_interval):
            return entry.price

        if not self.single_flight:
            return await self._update(asset, entry)

        lock = self._locks.setdefault(asset, asyncio.Lock())
        async with lock:
            if entry.is_fresh(self._clock(), self.refresh_interval):
                return entry.price
            return await self._update(asset, entry)

    async def get_prices(self, assets: Iterable[str]) -> dict[str, float]:
        """Look up several assets concurrently."""
        symbols = list(dict.fromkeys(assets))
        prices = await asyncio.gather(*(self.get_price(s) for s in symbols))
        return dict(zip(symbols, prices))

    async def _update(self, asset: str, entry: AssetEntry) -> float:
        result = await self._refresh(entry, self._clock())
        if isinstance(result, RefreshFailed):
            logger.error("Failed to load oracle price for %s: %s", asset, result.reason)
            return entry.price

        entry.price = result.price
        # A zero price leaves the entry in the never-fetched state.
        entry.last_updated = result.fetched_at if result.price != 0 else 0
        logger.debug("Updated %s price: %s %s", asset, result.price, self.quote_ticker)
        return result.price

    async def _refresh(self, entry: AssetEntry, now: int) -> RefreshResult:
        try:
            provider = self._providers.get(type_name(entry.type))
            if provider is None:
                raise ConfigurationError(
                    f"no price provider for type '{type_name(entry.type)}'"
                )
            body = await self._fetch(provider.build_url(entry.ticker))
            price = parse_response(self._providers, entry.type, body, entry.ticker)
        except Exception as e:
            return RefreshFailed(reason=str(e) or type(e).__name__, error=e)
        return PriceFetched(price=price, fetched_at=now)

    async def _fetch(self, url: str) -> Any:
        session = await self.start()

        try:
            async with session.get(
                url, timeout=aiohttp.ClientTimeout(total=self.request_timeout)
            ) as response:
                if not 200 <= response.status < 300:
                    raise NetworkFailure(f"HTTP {response.status}")
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ParseFailure(f"invalid JSON body: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkFailure(str(e) or type(e).__name__) from e
