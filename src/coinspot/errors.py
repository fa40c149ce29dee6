"""
Coinspot Client Errors

Exception hierarchy raised by the Coinspot REST client.
"""

from typing import Optional


class CoinspotError(Exception):
    """Base class for all client errors."""


class ConfigError(CoinspotError):
    """Missing or invalid client configuration (url, key or secret)."""


class InvalidParameterError(CoinspotError, ValueError):
    """An API argument is missing or cannot be sent as given."""


class RequestError(CoinspotError):
    """
    HTTP-level or transport failure.

    Attributes:
        path: API path that was requested
        status_code: HTTP status, None for transport failures
        reason: HTTP reason phrase, if a response was received
        detail: Response body text returned by the exchange
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        detail: str = "",
    ):
        super().__init__(message)
        self.path = path
        self.status_code = status_code
        self.reason = reason
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        if self.detail:
            return f"{base}: {self.detail}"
        return base
