"""OAuth2 resource-owner password authentication.

Every call to ``get_headers`` requests a new access token; tokens are not
cached between requests.
"""

import logging
from typing import Any, Mapping, Optional

from upvest.auth.base import AuthProvider, Headers, register_provider
from upvest.auth.credentials import OAuth
from upvest.client import Client
from upvest.errors import HttpError, TokenMissing, TokenRequestFailed

logger = logging.getLogger(__name__)

OAUTH_PATH = "/clientele/oauth2/token"
GRANT_TYPE = "password"
SCOPE = "read write echo transaction"

# Content type the token endpoint expects
URLENCODED = "application/x-www-form-urlencoded"

TOKEN_REQUEST_HEADERS = {
    "Content-Type": URLENCODED,
    "Cache-Control": "no-cache",
}


@register_provider(OAuth)
class OAuthProvider(AuthProvider):
    """Authenticates requests on clientele endpoints with a bearer token.

    The outer request's method, path and body play no part; the headers
    depend only on the credential.
    """

    def get_headers(
        self,
        credential: OAuth,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Headers:
        access_token = self.get_access_token(credential)
        return {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    def token_client(self) -> Client:
        """Build the credential-less client used for the token request.

        It shares the outer client's base URL, version, timeout, HTTP session
        and request metrics but holds no credential, so the transport sends
        the token request without consulting any auth provider.
        """
        return Client(
            auth=None,
            base_url=self.client.base_url,
            api_version=self.client.api_version,
            headers=TOKEN_REQUEST_HEADERS,
            timeout=self.client.timeout,
            session=self.client.session,
            metrics=self.client.metrics,
        )

    def get_access_token(self, credential: OAuth) -> str:
        """Request a new access token for ``credential``.

        Raises:
            MissingCredentialField: If a credential field is empty
            TokenRequestFailed: If the token request fails
            TokenMissing: If the response carries no access token
        """
        # The transport imports the provider registry, so import it lazily
        from upvest.clients.base import request

        credential.require()

        params = {
            "grant_type": GRANT_TYPE,
            "scope": SCOPE,
            "client_id": credential.client_id,
            "client_secret": credential.client_secret,
            "username": credential.username,
            "password": credential.password,
        }

        logger.info(
            "Requesting access token via password grant",
            extra={"client_id": credential.client_id, "scope": SCOPE}
        )

        try:
            resp = request("post", OAUTH_PATH, params, self.token_client())
        except HttpError as e:
            logger.error(
                "Token request failed",
                extra={"client_id": credential.client_id, "error": str(e)}
            )
            raise TokenRequestFailed(e) from e

        access_token = resp.get("access_token") if isinstance(resp, dict) else None
        if not access_token:
            raise TokenMissing("Token endpoint response has no access_token")

        logger.info(
            "Token obtained successfully",
            extra={
                "token_type": resp.get("token_type", "Bearer"),
                "expires_in": resp.get("expires_in"),
            }
        )
        return access_token
