"""Authentication modules for API access.

Supports:
- API key authentication with HMAC-SHA512 request signing
- OAuth2 password grant, one token request per signed request

Importing this package registers both providers.
"""

from .base import AuthProvider, get_headers, provider_for, register_provider
from .credentials import Credential, KeyAuth, OAuth, auth_from_env
from .api_key import APIKeyProvider
from .oauth2 import OAuthProvider

__all__ = [
    "AuthProvider",
    "get_headers",
    "provider_for",
    "register_provider",
    "Credential",
    "KeyAuth",
    "OAuth",
    "auth_from_env",
    "APIKeyProvider",
    "OAuthProvider",
]
