"""Client configuration shared by every API call."""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from dotenv import find_dotenv, load_dotenv

from upvest.utils.clock import Clock, timestamp

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.playground.upvest.co/"
DEFAULT_API_VERSION = "1.0"
DEFAULT_TIMEOUT = 30

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "User-Agent": "upvest-python",
}


@dataclass
class RequestMetrics:
    """Metrics for API requests.

    Shared by every request a client makes, including nested token requests,
    so updates go through a lock.
    """

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_duration_ms: float = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_request(self, duration_ms: float, success: bool) -> None:
        """Record a request."""
        with self._lock:
            self.total_requests += 1
            self.total_duration_ms += duration_ms
            if success:
                self.successful_requests += 1
            else:
                self.failed_requests += 1

    @property
    def avg_duration_ms(self) -> float:
        """Average request duration."""
        if not self.total_requests:
            return 0
        return self.total_duration_ms / self.total_requests

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "total_duration_ms": round(self.total_duration_ms, 2),
            "avg_duration_ms": round(self.avg_duration_ms, 2),
        }


class Client:
    """Holds the credential and base configuration for API calls.

    A client is passed to every request. Its credential (a ``KeyAuth`` or
    ``OAuth`` instance, or ``None`` for unauthenticated calls) decides which
    auth provider signs the request.
    """

    def __init__(
        self,
        auth: Any = None,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        headers: Optional[dict] = None,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Optional[Clock] = None,
        session: Optional[requests.Session] = None,
        metrics: Optional[RequestMetrics] = None,
    ):
        """Initialize client.

        Args:
            auth: Credential used to authenticate requests
            base_url: Base URL for the API
            api_version: Version segment prefixed to every request path
            headers: Base headers (default: JSON content type and user agent)
            timeout: Request timeout in seconds
            clock: Source of Unix seconds for request signing
            session: HTTP session (a new one is created if not provided)
            metrics: Request metrics to record into (default: a new record)
        """
        if not base_url:
            raise ValueError("base_url is required")

        self.auth = auth
        self.base_url = base_url
        self.api_version = str(api_version).strip("/")
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)
        self.timeout = timeout
        self.clock = clock or timestamp
        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.metrics = RequestMetrics() if metrics is None else metrics

    @classmethod
    def from_env(cls, auth: Any = None, **kwargs) -> "Client":
        """Create a client from ``UPVEST_*`` environment variables.

        Reads ``UPVEST_BASE_URL``, ``UPVEST_API_VERSION`` and ``UPVEST_TIMEOUT``.
        When ``auth`` is not given, the credential comes from
        ``auth_from_env``.
        """
        from upvest.auth.credentials import auth_from_env

        load_dotenv(find_dotenv(usecwd=True))

        if auth is None:
            auth = auth_from_env()

        kwargs.setdefault("base_url", os.getenv("UPVEST_BASE_URL", DEFAULT_BASE_URL))
        kwargs.setdefault("api_version", os.getenv("UPVEST_API_VERSION", DEFAULT_API_VERSION))
        kwargs.setdefault("timeout", float(os.getenv("UPVEST_TIMEOUT", DEFAULT_TIMEOUT)))

        logger.debug(
            "Client configured from environment",
            extra={
                "base_url": kwargs["base_url"],
                "api_version": kwargs["api_version"],
                "auth_type": type(auth).__name__,
            }
        )
        return cls(auth=auth, **kwargs)

    def versioned_url(self, path: str) -> str:
        """Prefix ``path`` with the API version segment.

        Example:
            >>> Client().versioned_url("/kms/wallets/")
            '/1.0/kms/wallets/'
        """
        if not path.startswith("/"):
            path = f"/{path}"
        return f"/{self.api_version}{path}"

    def url(self, path: str) -> str:
        """Full URL for an unversioned request path."""
        return f"{self.base_url.rstrip('/')}{self.versioned_url(path)}"

    def __repr__(self) -> str:
        return (
            f"Client(auth={self.auth!r}, base_url={self.base_url!r}, "
            f"api_version={self.api_version!r})"
        )

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close the session."""
        self.close()
