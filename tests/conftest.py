"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from coinspot import ClientConfig, CoinspotClient

FIXED_NONCE = 1700000000
API_URL = "https://www.coinspot.com.au/api/"
API_KEY = "test-key"
API_SECRET = "test-secret"


def make_response(status_code=200, reason="OK", json_data=None, text=None):
    """Build a mock requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.text = text if text is not None else ""
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")

    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error: {reason}", response=response
        )
    return response


@pytest.fixture
def config():
    """Standard client configuration."""
    return ClientConfig(base_url=API_URL, api_key=API_KEY, api_secret=API_SECRET)


@pytest.fixture
def session():
    """Mock HTTP session that answers OK with an empty status body."""
    mock_session = MagicMock(spec=requests.Session)
    mock_session.post.return_value = make_response(json_data={"status": "ok"})
    return mock_session


@pytest.fixture
def client(config, session):
    """Client with a mock session and a fixed clock."""
    return CoinspotClient(config, session=session, clock=lambda: FIXED_NONCE)
