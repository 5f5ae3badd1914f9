"""Exception hierarchy for the Upvest client.

UpvestError
├── HttpError
│   ├── NetworkError
│   └── APIError
└── AuthError
    ├── MissingCredentialField
    ├── SigningFailed
    ├── TokenRequestFailed
    ├── TokenMissing
    └── UnsupportedCredential
"""

from typing import Any, Optional


class UpvestError(Exception):
    """Base class for all errors raised by this package."""


# ============================================
# Transport errors
# ============================================

class HttpError(UpvestError):
    """Raised when an HTTP call cannot produce a successful response."""


class NetworkError(HttpError):
    """Raised when the request never got a response (connection, timeout)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class APIError(HttpError):
    """Raised on a non-2xx response.

    ``body`` holds the decoded JSON error body when the server sent one,
    otherwise the raw response text.
    """

    def __init__(self, status_code: int, body: Any = None, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status_code} from {url or 'server'}: {body!r}")


# ============================================
# Authentication errors
# ============================================

class AuthError(UpvestError):
    """Raised when authentication headers cannot be computed."""


class MissingCredentialField(AuthError):
    """A required credential attribute is empty or absent."""

    def __init__(self, field_name: str, credential_type: str = "credential"):
        self.field_name = field_name
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is missing required field: {field_name}")


class SigningFailed(AuthError):
    """HMAC computation or JSON canonicalization failed."""


class TokenRequestFailed(AuthError):
    """The nested OAuth token request failed at the transport layer."""

    def __init__(self, inner: HttpError):
        self.inner = inner
        super().__init__(f"OAuth token request failed: {inner}")


class TokenMissing(AuthError):
    """The token endpoint answered without an ``access_token``."""


class UnsupportedCredential(AuthError):
    """No auth provider is registered for the credential's type."""

    def __init__(self, credential: Any):
        self.credential_type = type(credential).__name__
        super().__init__(f"No auth provider registered for {self.credential_type}")
