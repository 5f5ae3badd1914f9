"""Auth provider contract and dispatch.

Each credential type has exactly one registered provider. The transport asks
``get_headers`` for the headers of a request and never looks at which kind of
credential the client holds; adding a scheme means registering a provider for
a new credential class.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from upvest.errors import UnsupportedCredential

if TYPE_CHECKING:
    from upvest.client import Client

logger = logging.getLogger(__name__)

Headers = dict[str, str]

_PROVIDERS: dict[type, type["AuthProvider"]] = {}


class AuthProvider(ABC):
    """Computes the authentication headers for one request.

    Providers are built per client so they can use its versioning
    convention, clock and transport settings. They hold no state of their
    own beyond that reference.
    """

    #: Credential class this provider handles, set by ``register_provider``
    credential_type: Optional[type] = None

    def __init__(self, client: "Client"):
        self.client = client

    @abstractmethod
    def get_headers(
        self,
        credential: Any,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Headers:
        """Return the headers to merge over the client's base headers.

        Args:
            credential: The credential held by the client
            method: HTTP method of the outgoing request
            path: Unversioned request path
            body: Request payload (may be empty)

        Raises:
            AuthError: If headers cannot be computed
        """


def register_provider(credential_type: type) -> Callable[[type[AuthProvider]], type[AuthProvider]]:
    """Class decorator registering a provider for ``credential_type``.

    Usage:
        @register_provider(KeyAuth)
        class APIKeyProvider(AuthProvider):
            ...
    """
    def decorator(provider_cls: type[AuthProvider]) -> type[AuthProvider]:
        existing = _PROVIDERS.get(credential_type)
        if existing is not None and existing is not provider_cls:
            logger.warning(
                "Replacing auth provider",
                extra={
                    "credential_type": credential_type.__name__,
                    "previous_provider": existing.__name__,
                    "provider": provider_cls.__name__,
                }
            )
        provider_cls.credential_type = credential_type
        _PROVIDERS[credential_type] = provider_cls
        return provider_cls

    return decorator


def provider_for(credential: Any) -> type[AuthProvider]:
    """Look up the provider class for a credential.

    Subclasses of a registered credential type resolve to the nearest
    registered base.

    Raises:
        UnsupportedCredential: If no provider handles the credential
    """
    for cls in type(credential).__mro__:
        provider_cls = _PROVIDERS.get(cls)
        if provider_cls is not None:
            return provider_cls
    raise UnsupportedCredential(credential)


def get_headers(
    client: "Client",
    method: str,
    path: str,
    body: Optional[Mapping[str, Any]] = None,
) -> Headers:
    """Compute authentication headers for a request made through ``client``.

    Returns an empty dict when the client holds no credential.
    """
    credential = client.auth
    if credential is None:
        return {}

    provider = provider_for(credential)(client)
    headers = provider.get_headers(credential, method, path, body)

    logger.debug(
        "Computed auth headers",
        extra={
            "provider": type(provider).__name__,
            "method": str(method).upper(),
            "path": path,
            "header_names": list(headers),
        }
    )
    return headers
