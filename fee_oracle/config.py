"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import AssetType

logger = logging.getLogger(__name__)

HOUR_MS = 60 * 60 * 1000

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssetConfig:
    type: str = ""
    ticker: str = ""


@dataclass(frozen=True)
class ProvidersConfig:
    fixer_api_key: str = ""
    polygon_api_key: str = ""


@dataclass(frozen=True)
class OracleConfig:
    quote_ticker: str = ""
    refresh_interval_ms: int = 6 * HOUR_MS
    request_timeout: float = 15.0
    single_flight: bool = False
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    assets: dict[str, AssetConfig] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------

_KNOWN_TYPES = {t.value for t in AssetType}

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _bool(value: Any, name: str) -> bool:
    """Parse a YAML boolean, accepting interpolated strings such as 'false'."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _build_assets(raw: dict[str, Any]) -> dict[str, AssetConfig]:
    assets: dict[str, AssetConfig] = {}
    for symbol, cfg in raw.items():
        if not isinstance(cfg, dict):
            raise ValueError(f"Asset '{symbol}' must be a mapping with type and ticker")
        ticker = _str(cfg.get("ticker"))
        if not ticker:
            raise ValueError(f"Asset '{symbol}' has no ticker")
        asset_type = _str(cfg.get("type"))
        if asset_type not in _KNOWN_TYPES:
            # Absorbed at refresh time; the asset keeps reporting its last price.
            logger.warning("Asset '%s' has unknown type '%s'", symbol, asset_type)
        assets[str(symbol)] = AssetConfig(type=asset_type, ticker=ticker)
    return assets


def _build_providers(raw: dict[str, Any]) -> ProvidersConfig:
    return ProvidersConfig(
        fixer_api_key=_str(raw.get("fixer_api_key")),
        polygon_api_key=_str(raw.get("polygon_api_key")),
    )


def _build_oracle(raw: dict[str, Any]) -> OracleConfig:
    oracle_raw = raw.get("oracle") or {}
    hours = float(oracle_raw.get("refresh_interval_hours", 6))
    return OracleConfig(
        quote_ticker=_str(oracle_raw.get("quote_ticker")),
        refresh_interval_ms=int(hours * HOUR_MS),
        request_timeout=float(oracle_raw.get("request_timeout", 15.0)),
        single_flight=_bool(oracle_raw.get("single_flight"), "oracle.single_flight"),
        providers=_build_providers(raw.get("providers") or {}),
        assets=_build_assets(raw.get("assets") or {}),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> OracleConfig:
    """Load oracle configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    cfg = _build_oracle(_interpolate_env(raw))
    logger.info("Configuration loaded from %s", config_path)
    return cfg
