"""Python client for the Upvest API.

Usage:
    from upvest import Client, KeyAuth, request

    client = Client(auth=KeyAuth("key", "secret", "passphrase"))
    wallets = request("GET", "/kms/wallets/", {}, client)
"""

from upvest.client import Client, RequestMetrics
from upvest.auth import (
    AuthProvider,
    APIKeyProvider,
    KeyAuth,
    OAuth,
    OAuthProvider,
    auth_from_env,
    get_headers,
    register_provider,
)
from upvest.clients import request
from upvest.errors import (
    APIError,
    AuthError,
    HttpError,
    MissingCredentialField,
    NetworkError,
    SigningFailed,
    TokenMissing,
    TokenRequestFailed,
    UnsupportedCredential,
    UpvestError,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "RequestMetrics",
    "AuthProvider",
    "APIKeyProvider",
    "KeyAuth",
    "OAuth",
    "OAuthProvider",
    "auth_from_env",
    "get_headers",
    "register_provider",
    "request",
    "APIError",
    "AuthError",
    "HttpError",
    "MissingCredentialField",
    "NetworkError",
    "SigningFailed",
    "TokenMissing",
    "TokenRequestFailed",
    "UnsupportedCredential",
    "UpvestError",
]
