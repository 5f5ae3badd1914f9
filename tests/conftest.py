"""Pytest configuration and fixtures."""

import json
from unittest.mock import Mock

import pytest
import requests

from upvest import Client, KeyAuth, OAuth
from upvest.utils import fixed_clock

FIXED_TIMESTAMP = 1700000000


def _response(status_code: int = 200, payload=None, text: str = None) -> Mock:
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.content = text.encode("utf-8")
    return response


@pytest.fixture
def make_response():
    """Factory for stand-ins of ``requests.Response``."""
    return _response


@pytest.fixture
def key_auth():
    """API key credential from the documented golden vector."""
    return KeyAuth(api_key="k", api_secret="s", api_passphrase="p")


@pytest.fixture
def oauth():
    """OAuth password-grant credential."""
    return OAuth(
        client_id="client-id",
        client_secret="client-secret",
        username="alice",
        password="hunter2",
    )


@pytest.fixture
def mock_session():
    """HTTP session whose requests all succeed with an empty JSON object."""
    session = Mock(spec=requests.Session)
    session.request.return_value = _response(200, {})
    return session


@pytest.fixture
def key_client(key_auth, mock_session):
    """Client signing with the API key credential and a fixed clock."""
    return Client(
        auth=key_auth,
        base_url="https://api.example.test/",
        clock=fixed_clock(FIXED_TIMESTAMP),
        session=mock_session,
    )


@pytest.fixture
def oauth_client(oauth, mock_session):
    """Client authenticating with OAuth against a mock session."""
    return Client(
        auth=oauth,
        base_url="https://api.example.test/",
        session=mock_session,
    )
