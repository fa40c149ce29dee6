"""
Coinspot Exchange Client

Signed REST client for the Coinspot read/write API. Every method is a
direct mapping to one remote endpoint; all requests are JSON POSTs.

Authentication:
- every request carries a `nonce` (Unix seconds)
- header `key`: API key
- header `sign`: hex HMAC-SHA512 of the JSON parameters, keyed by the secret
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

import requests

from .amounts import Number, format_amount, format_rate
from .config import ClientConfig
from .errors import ConfigError, InvalidParameterError, RequestError
from .signer import serialize_params, sign_payload

logger = logging.getLogger("coinspot.client")

SUCCESS_REASON = "OK"

Params = Dict[str, Any]


@dataclass(frozen=True)
class NonOkResponse:
    """
    The exchange answered, but not with reason phrase "OK".

    Returned instead of raised so callers can tell "no results" apart
    from a failed request. Always falsy.
    """
    path: str
    status_code: int
    reason: str
    text: str = ""

    def __bool__(self) -> bool:
        return False


ApiResult = Union[Any, NonOkResponse]


def _require(value: Any, field: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidParameterError(f"{field} is required")
    return value


class CoinspotClient:
    """
    Coinspot API client.

    Args:
        config: ClientConfig, or a mapping with keys url, key, secret
        session: HTTP session to use; one is created when omitted
        clock: Returns the current Unix time in seconds (nonce source)

    Raises:
        ConfigError: If url, key or secret is missing or empty.
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        if isinstance(config, ClientConfig):
            self.config = config
        elif isinstance(config, Mapping):
            self.config = ClientConfig.from_mapping(config)
        else:
            raise ConfigError("config must be a ClientConfig or a mapping")

        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._clock = clock

        self.base_url = self.config.base_url.rstrip("/") + "/"

        logger.info("CoinspotClient initialized: base_url=%s", self.base_url)

    def __enter__(self) -> "CoinspotClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def _nonce(self) -> int:
        return int(self._clock())

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResult:
        """
        Sign and POST params to an API path.

        Args:
            path: Endpoint relative to base_url (e.g. "my/balances")
            params: Request fields; `nonce` is added here

        Returns:
            Decoded JSON when the reason phrase is "OK", otherwise a
            NonOkResponse.

        Raises:
            RequestError: HTTP error status, transport failure, or a
                body that is not valid JSON.
        """
        data: Params = dict(params or {})
        data["nonce"] = self._nonce()

        payload = serialize_params(data)
        if self.config.nonce_only_body:
            body = serialize_params({"nonce": data["nonce"]})
        else:
            body = payload

        headers = {
            "key": self.config.api_key,
            "sign": sign_payload(self.config.api_secret, payload),
            "Content-Type": "application/json",
        }

        logger.debug("POST %s nonce=%s", path, data["nonce"])

        try:
            response = self._session.post(
                self._url(path),
                data=body,
                headers=headers,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            resp = e.response
            status = resp.status_code if resp is not None else None
            reason = resp.reason if resp is not None else None
            detail = resp.text if resp is not None else ""
            logger.error("Coinspot request failed: path=%s status=%s %s", path, status, reason)
            raise RequestError(
                f"HTTP {status} {reason} for {path}",
                path=path,
                status_code=status,
                reason=reason,
                detail=detail,
            ) from e
        except requests.RequestException as e:
            logger.error("Coinspot request failed: path=%s error=%s", path, e)
            raise RequestError(f"Request to {path} failed: {e}", path=path) from e

        if response.reason != SUCCESS_REASON:
            logger.warning(
                "Coinspot returned no results: path=%s status=%s reason=%s",
                path,
                response.status_code,
                response.reason,
            )
            return NonOkResponse(
                path=path,
                status_code=response.status_code,
                reason=response.reason or "",
                text=response.text or "",
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to parse Coinspot response: path=%s error=%s", path, e)
            raise RequestError(
                f"Invalid JSON from {path}",
                path=path,
                status_code=response.status_code,
                reason=response.reason,
                detail=response.text or "",
            ) from e

    # =========================================================================
    # MARKET ENDPOINTS
    # =========================================================================

    def list_open_orders(self, cointype: str) -> ApiResult:
        """Open orders on the exchange for a coin (e.g. 'BTC', 'LTC', 'DOGE')."""
        return self.request("orders", {"cointype": _require(cointype, "cointype")})

    def order_history(self, cointype: str) -> ApiResult:
        """Last 1000 completed orders on the exchange for a coin."""
        return self.request("orders/history", {"cointype": _require(cointype, "cointype")})

    # =========================================================================
    # WALLET ENDPOINTS
    # =========================================================================

    def deposit_address(self, cointype: str) -> ApiResult:
        """Receive address for your wallet of the given coin."""
        return self.request("my/coin/deposit", {"cointype": _require(cointype, "cointype")})

    def my_balances(self) -> ApiResult:
        """Wallet balances for each coin."""
        return self.request("my/balances")

    def my_open_orders(self) -> ApiResult:
        """Your open orders by coin type (max 100 results)."""
        return self.request("my/orders")

    # =========================================================================
    # TRADING ENDPOINTS
    # =========================================================================

    def quick_buy(self, cointype: str, amount: Number) -> ApiResult:
        """
        Place an instant buy order.

        Args:
            cointype: Coin shortname, e.g. 'BTC'
            amount: Coins to buy, max 8 decimal places
        """
        return self.request("quote/buy", {
            "cointype": _require(cointype, "cointype"),
            "amount": format_amount(amount),
        })

    def quick_sell(self, cointype: str, amount: Number) -> ApiResult:
        """
        Place an instant sell order.

        Args:
            cointype: Coin shortname, e.g. 'BTC'
            amount: Coins to sell, max 8 decimal places
        """
        return self.request("quote/sell", {
            "cointype": _require(cointype, "cointype"),
            "amount": format_amount(amount),
        })

    def place_buy_order(self, cointype: str, amount: Number, rate: Number) -> ApiResult:
        """
        Place an on-market buy order.

        Args:
            cointype: Coin shortname, e.g. 'BTC'
            amount: Coins to buy, max 8 decimal places
            rate: AUD rate you are willing to pay, max 6 decimal places

        Returns:
            Decoded JSON response or NonOkResponse
        """
        return self.request("my/buy", {
            "cointype": _require(cointype, "cointype"),
            "amount": format_amount(amount),
            "rate": format_rate(rate),
        })

    def place_sell_order(self, cointype: str, amount: Number, rate: Number) -> ApiResult:
        """
        Place an on-market sell order.

        Args:
            cointype: Coin shortname, e.g. 'BTC'
            amount: Coins to sell, max 8 decimal places
            rate: AUD rate you are willing to sell for, max 6 decimal places

        Returns:
            Decoded JSON response or NonOkResponse
        """
        return self.request("my/sell", {
            "cointype": _require(cointype, "cointype"),
            "amount": format_amount(amount),
            "rate": format_rate(rate),
        })

    def cancel_buy_order(self, order_id: Union[str, int]) -> ApiResult:
        """Cancel an on-market buy order."""
        return self.request("my/buy/cancel", {"id": _require(order_id, "id")})

    def cancel_sell_order(self, order_id: Union[str, int]) -> ApiResult:
        """Cancel an on-market sell order."""
        return self.request("my/sell/cancel", {"id": _require(order_id, "id")})
