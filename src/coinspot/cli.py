"""
Command-line access to the Coinspot client.

Credentials come from COINSPOT_API_KEY / COINSPOT_API_SECRET (a .env
file in the working directory is loaded first) or from --config.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import yaml
from dotenv import load_dotenv

from .client import CoinspotClient, NonOkResponse
from .config import ClientConfig, config_from_env, load_config
from .errors import CoinspotError
from .logging_setup import setup_logging

logger = logging.getLogger("coinspot.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_RESULTS = 2


def _call(client: CoinspotClient, args: argparse.Namespace):
    command = args.command
    if command == "balances":
        return client.my_balances()
    if command == "open-orders":
        return client.my_open_orders()
    if command == "orders":
        return client.list_open_orders(args.cointype)
    if command == "history":
        return client.order_history(args.cointype)
    if command == "deposit":
        return client.deposit_address(args.cointype)
    if command == "quick-buy":
        return client.quick_buy(args.cointype, args.amount)
    if command == "quick-sell":
        return client.quick_sell(args.cointype, args.amount)
    if command == "buy":
        return client.place_buy_order(args.cointype, args.amount, args.rate)
    if command == "sell":
        return client.place_sell_order(args.cointype, args.amount, args.rate)
    if command == "cancel-buy":
        return client.cancel_buy_order(args.id)
    if command == "cancel-sell":
        return client.cancel_sell_order(args.id)
    raise ValueError(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coinspot",
        description="Call the Coinspot REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    coinspot balances
    coinspot orders BTC
    coinspot buy BTC 0.5 60000
    coinspot cancel-sell 5f1e2d3c

Environment Variables:
    COINSPOT_API_URL     - API base URL (default: https://www.coinspot.com.au/api/)
    COINSPOT_API_KEY     - API key
    COINSPOT_API_SECRET  - API secret
        """,
    )
    parser.add_argument("--config", help="YAML config file with a coinspot section")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("balances", help="Wallet balances for each coin")
    sub.add_parser("open-orders", help="Your open orders")

    for name, help_text in (
        ("orders", "Open orders on the exchange"),
        ("history", "Last 1000 completed orders"),
        ("deposit", "Deposit address for a coin"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("cointype", help="Coin shortname, e.g. BTC")

    for name, help_text in (
        ("quick-buy", "Instant buy"),
        ("quick-sell", "Instant sell"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("cointype", help="Coin shortname, e.g. BTC")
        p.add_argument("amount", help="Coin amount (max 8 decimal places)")

    for name, help_text in (
        ("buy", "Place an on-market buy order"),
        ("sell", "Place an on-market sell order"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("cointype", help="Coin shortname, e.g. BTC")
        p.add_argument("amount", help="Coin amount (max 8 decimal places)")
        p.add_argument("rate", help="AUD rate (max 6 decimal places)")

    for name, help_text in (
        ("cancel-buy", "Cancel an on-market buy order"),
        ("cancel-sell", "Cancel an on-market sell order"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("id", help="Order id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    load_dotenv()

    try:
        if args.config:
            settings = load_config(args.config)
            if args.debug:
                settings["logging"]["level"] = "DEBUG"
            setup_logging(settings)
            config = ClientConfig.from_mapping(settings["coinspot"])
        else:
            setup_logging({"logging": {"level": "DEBUG" if args.debug else "WARNING"}})
            config = config_from_env()

        logger.debug("Running command %s", args.command)
        with CoinspotClient(config) as client:
            result = _call(client, args)

    except (CoinspotError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    if isinstance(result, NonOkResponse):
        print(
            f"No results ({result.status_code} {result.reason})",
            file=sys.stderr,
        )
        return EXIT_NO_RESULTS

    print(json.dumps(result, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
