"""Protocol interfaces for the fee oracle."""
from .price_oracle import PriceOracle
from .price_provider import PriceProvider

__all__ = ["PriceOracle", "PriceProvider"]
