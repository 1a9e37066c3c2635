"""Command-line interface for the fee oracle."""
from __future__ import annotations

import argparse
import asyncio
import sys

from . import interfaces
from .config import OracleConfig, load_config
from .logging_setup import configure_logging
from .oracle import PriceOracle


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="fee-oracle",
        description="Asset prices in the configured quote currency",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    price_parser = sub.add_parser("price", help="Look up asset prices")
    price_parser.add_argument("assets", nargs="+", help="Asset symbols")

    sub.add_parser("assets", help="List configured assets")

    return parser


def format_assets(config: OracleConfig) -> str:
    lines = [f"Quote ticker: {config.quote_ticker or '(unset)'}"]
    for symbol, asset in sorted(config.assets.items()):
        lines.append(f"  {symbol}: {asset.type} {asset.ticker}")
    return "\n".join(lines)


async def lookup_prices(
    oracle: interfaces.PriceOracle, assets: list[str]
) -> dict[str, float]:
    """Look up each asset in order, once."""
    prices: dict[str, float] = {}
    for asset in assets:
        if asset not in prices:
            prices[asset] = await oracle.get_price(asset)
    return prices


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "assets":
        print(format_assets(config))
    elif args.command == "price":
        async with PriceOracle(config) as oracle:
            prices = await lookup_prices(oracle, args.assets)
        for asset, price in prices.items():
            print(f"{asset}: {price:.6f} {config.quote_ticker}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
