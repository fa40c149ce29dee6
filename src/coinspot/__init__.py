"""
Coinspot Exchange Client

Signed REST client for the Coinspot exchange: balances, deposit
addresses, instant and on-market orders, and cancellations.
"""

from .amounts import (
    AMOUNT_DECIMALS,
    RATE_DECIMALS,
    format_amount,
    format_rate,
)
from .client import CoinspotClient, NonOkResponse
from .config import (
    ClientConfig,
    DEFAULT_API_URL,
    client_config_from_file,
    config_from_env,
    load_config,
)
from .errors import (
    CoinspotError,
    ConfigError,
    InvalidParameterError,
    RequestError,
)
from .logging_setup import setup_logging
from .signer import serialize_params, sign_params, sign_payload

__all__ = [
    # Client
    "CoinspotClient",
    "NonOkResponse",
    # Configuration
    "ClientConfig",
    "DEFAULT_API_URL",
    "load_config",
    "config_from_env",
    "client_config_from_file",
    "setup_logging",
    # Signing
    "serialize_params",
    "sign_payload",
    "sign_params",
    # Amounts
    "AMOUNT_DECIMALS",
    "RATE_DECIMALS",
    "format_amount",
    "format_rate",
    # Errors
    "CoinspotError",
    "ConfigError",
    "InvalidParameterError",
    "RequestError",
]
