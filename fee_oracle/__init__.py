"""Cached asset prices in a configured quote currency."""
from .config import AssetConfig, OracleConfig, ProvidersConfig, load_config
from .errors import ConfigurationError, NetworkFailure, OracleError, ParseFailure
from .models import AssetEntry, AssetType
from .oracle import PriceOracle

__all__ = [
    "AssetConfig",
    "AssetEntry",
    "AssetType",
    "ConfigurationError",
    "NetworkFailure",
    "OracleConfig",
    "OracleError",
    "ParseFailure",
    "PriceOracle",
    "ProvidersConfig",
    "load_config",
]
