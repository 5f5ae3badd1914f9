"""API Key authentication: HMAC-SHA512 request signing."""

import hashlib
import hmac
import logging
from typing import Any, Mapping, Optional

from upvest.auth.base import AuthProvider, Headers, register_provider
from upvest.auth.credentials import KeyAuth
from upvest.errors import SigningFailed
from upvest.utils.codec import canonical_json

logger = logging.getLogger(__name__)


def build_message(
    timestamp: int,
    method: str,
    versioned_path: str,
    body: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build the string whose HMAC becomes the request signature.

    Timestamp, upper-cased method, versioned path and canonical body are
    concatenated without separators.

    Raises:
        SigningFailed: If the body cannot be serialized
    """
    try:
        payload = canonical_json(body)
    except (TypeError, ValueError) as e:
        raise SigningFailed(f"Cannot serialize request body for signing: {e}") from e

    return f"{timestamp}{str(method).upper()}{versioned_path}{payload}"


def generate_signature(message: str, api_secret: str) -> str:
    """Return the lower-case hex HMAC-SHA512 of ``message`` keyed by ``api_secret``.

    Raises:
        SigningFailed: If the secret or message cannot be encoded
    """
    try:
        return hmac.new(
            api_secret.encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha512,
        ).hexdigest()
    except (AttributeError, UnicodeError) as e:
        raise SigningFailed(f"Cannot compute request signature: {e}") from e


@register_provider(KeyAuth)
class APIKeyProvider(AuthProvider):
    """Authenticates requests on tenant endpoints using API keys.

    The timestamp is read once per call from the client's clock and used
    both in the signed message and in the ``X-UP-API-Timestamp`` header,
    truncated to whole seconds.
    """

    def get_headers(
        self,
        credential: KeyAuth,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Headers:
        credential.require()

        versioned_path = self.client.versioned_url(path)
        ts = int(self.client.clock())
        message = build_message(ts, method, versioned_path, body)
        signature = generate_signature(message, credential.api_secret)

        logger.debug(
            "Signed request",
            extra={"method": str(method).upper(), "signed_path": versioned_path, "signed_timestamp": ts}
        )

        return {
            "Content-Type": "application/json",
            "X-UP-API-Key": credential.api_key,
            "X-UP-API-Signature": signature,
            "X-UP-API-Timestamp": str(ts),
            "X-UP-API-Passphrase": credential.api_passphrase,
            "X-UP-API-Signed-Path": versioned_path,
        }
