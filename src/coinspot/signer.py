"""
Request signing for the Coinspot API.

Signature = hex(HMAC-SHA512(JSON(params), secret))

The JSON text that is signed must be byte-for-byte the text sent as the
request body, so serialization lives here next to the signer.
"""

import hashlib
import hmac
import json
from typing import Any, Dict


def serialize_params(params: Dict[str, Any]) -> str:
    """Compact JSON in insertion order (matches the exchange's reference encoder)."""
    return json.dumps(params, separators=(",", ":"))


def sign_payload(secret: str, payload: str) -> str:
    """Return the lowercase hex HMAC-SHA512 of payload keyed by secret."""
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


def sign_params(secret: str, params: Dict[str, Any]) -> str:
    """Serialize and sign a parameter mapping."""
    return sign_payload(secret, serialize_params(params))
