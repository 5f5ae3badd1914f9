"""Credential variants accepted by the Upvest API."""

import os
from dataclasses import dataclass, field, fields
from typing import Optional, Union

from upvest.errors import MissingCredentialField


def _mask(value: Optional[str]) -> str:
    if not value:
        return "''"
    return "'***'"


class _Credential:
    """Shared behaviour for the frozen credential dataclasses."""

    def require(self) -> None:
        """Check that every field is a non-empty string.

        Raises:
            MissingCredentialField: On the first empty or absent field
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value:
                raise MissingCredentialField(f.name, type(self).__name__)

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            shown = _mask(value) if f.metadata.get("secret") else repr(value)
            parts.append(f"{f.name}={shown}")
        return f"{type(self).__name__}({', '.join(parts)})"


@dataclass(frozen=True, repr=False)
class KeyAuth(_Credential):
    """API key credentials for tenant endpoints.

    Requests are signed with HMAC-SHA512 over the request line and body,
    keyed by ``api_secret``.
    """

    api_key: str
    api_secret: str = field(metadata={"secret": True})
    api_passphrase: str = field(metadata={"secret": True})

    @classmethod
    def from_env(cls, prefix: str = "UPVEST_") -> "KeyAuth":
        """Build from ``UPVEST_API_KEY``, ``UPVEST_API_SECRET`` and ``UPVEST_API_PASSPHRASE``."""
        return cls(
            api_key=os.getenv(f"{prefix}API_KEY", ""),
            api_secret=os.getenv(f"{prefix}API_SECRET", ""),
            api_passphrase=os.getenv(f"{prefix}API_PASSPHRASE", ""),
        )


@dataclass(frozen=True, repr=False)
class OAuth(_Credential):
    """OAuth2 resource-owner password credentials for clientele endpoints."""

    client_id: str
    client_secret: str = field(metadata={"secret": True})
    username: str
    password: str = field(metadata={"secret": True})

    @classmethod
    def from_env(cls, prefix: str = "UPVEST_") -> "OAuth":
        """Build from ``UPVEST_CLIENT_ID``, ``UPVEST_CLIENT_SECRET``, ``UPVEST_USERNAME`` and ``UPVEST_PASSWORD``."""
        return cls(
            client_id=os.getenv(f"{prefix}CLIENT_ID", ""),
            client_secret=os.getenv(f"{prefix}CLIENT_SECRET", ""),
            username=os.getenv(f"{prefix}USERNAME", ""),
            password=os.getenv(f"{prefix}PASSWORD", ""),
        )


Credential = Union[KeyAuth, OAuth]


def auth_from_env(prefix: str = "UPVEST_") -> Credential:
    """Pick a credential from the environment.

    API key credentials win when ``UPVEST_API_KEY`` is set; otherwise OAuth
    credentials are used when ``UPVEST_CLIENT_ID`` is set.

    Raises:
        ValueError: If neither is configured
    """
    if os.getenv(f"{prefix}API_KEY"):
        return KeyAuth.from_env(prefix)
    if os.getenv(f"{prefix}CLIENT_ID"):
        return OAuth.from_env(prefix)
    raise ValueError(f"{prefix}API_KEY or {prefix}CLIENT_ID is required")
