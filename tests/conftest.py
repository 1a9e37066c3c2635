"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from fee_oracle.config import AssetConfig, OracleConfig, ProvidersConfig

T0 = 1_700_000_000_000
SIX_HOURS_MS = 6 * 60 * 60 * 1000


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_assets() -> dict[str, AssetConfig]:
    return {
        "ugbp": AssetConfig(type="forex", ticker="GBP"),
        "mAAPL": AssetConfig(type="stock", ticker="AAPL"),
        "uluna": AssetConfig(type="crypto", ticker="terra-luna"),
    }


@pytest.fixture()
def sample_oracle_config(sample_assets: dict[str, AssetConfig]) -> OracleConfig:
    return OracleConfig(
        quote_ticker="USD",
        providers=ProvidersConfig(fixer_api_key="fixer-key", polygon_api_key="poly-key"),
        assets=sample_assets,
    )


# ---------------------------------------------------------------------------
# Clock and HTTP session fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def _make_response(body: Any = None, status: int = 200) -> AsyncMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)
    return mock_response


def _make_session(*responses: AsyncMock) -> AsyncMock:
    mock_session = AsyncMock()
    mock_session.get = MagicMock(side_effect=list(responses))
    mock_session.close = AsyncMock()
    return mock_session


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    oracle:
      quote_ticker: "${TEST_QUOTE_TICKER}"
      refresh_interval_hours: 6
      request_timeout: 10
    providers:
      fixer_api_key: "${TEST_FIXER_KEY}"
      polygon_api_key: "poly"
    assets:
      ukrw: {type: forex, ticker: KRW}
      mAAPL: {type: stock, ticker: AAPL}
      uluna: {type: crypto, ticker: terra-luna}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TEST_QUOTE_TICKER", "USD")
    monkeypatch.setenv("TEST_FIXER_KEY", "fx-secret")
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture()
def make_response():
    return _make_response


@pytest.fixture()
def make_session():
    return _make_session
