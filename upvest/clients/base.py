"""HTTP transport: authenticated requests against the Upvest API."""

import logging
import time
from typing import Any, Mapping, Optional

import requests

from upvest.auth.base import get_headers
from upvest.client import Client
from upvest.errors import APIError, NetworkError
from upvest.utils.codec import canonical_json, decode_json

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _encode_body(
    method: str,
    body: Optional[Mapping[str, Any]],
    headers: Mapping[str, str],
) -> dict:
    """Build the ``requests`` keyword arguments that carry ``body``.

    GET requests send the body as query parameters. Form content types send
    it form-encoded; everything else is sent as the same canonical JSON text
    the request was signed over.
    """
    if method == "GET":
        return {"params": dict(body)} if body else {}
    if headers.get("Content-Type", "").startswith(FORM_CONTENT_TYPE):
        return {"data": dict(body or {})}
    return {"data": canonical_json(body).encode("utf-8")}


def _decode_response(response: requests.Response) -> Any:
    try:
        return decode_json(response.text)
    except ValueError:
        return response.text


def request(
    method: str,
    path: str,
    body: Optional[Mapping[str, Any]],
    client: Client,
) -> Any:
    """Make an HTTP request with authentication, timing and logging.

    Auth headers are computed before anything goes on the wire; if that
    fails, the ``AuthError`` propagates and no request is sent.

    Args:
        method: HTTP method (GET, POST, etc.)
        path: Unversioned API path (e.g. ``/kms/wallets/``)
        body: Request payload
        client: Client holding credential and configuration

    Returns:
        Decoded JSON response body

    Raises:
        AuthError: If authentication headers cannot be computed
        NetworkError: If no response was received
        APIError: On non-2xx responses
    """
    method = str(method).upper()
    body = body or {}

    request_headers = dict(client.headers)
    request_headers.update(get_headers(client, method, path, body))

    url = client.url(path)

    logger.debug(
        f"Making {method} request",
        extra={"url": url, "auth_type": type(client.auth).__name__}
    )

    # Start timing
    start_time = time.time()

    try:
        response = client.session.request(
            method=method,
            url=url,
            headers=request_headers,
            timeout=client.timeout,
            **_encode_body(method, body, request_headers),
        )
    except requests.exceptions.RequestException as e:
        duration_ms = (time.time() - start_time) * 1000
        client.metrics.record_request(duration_ms, success=False)

        logger.error(
            "API request failed",
            extra={
                "method": method,
                "path": path,
                "error": str(e),
                "duration_ms": round(duration_ms, 2),
            }
        )
        raise NetworkError(f"{method} {url} failed: {e}", cause=e) from e

    duration_ms = (time.time() - start_time) * 1000
    client.metrics.record_request(duration_ms, success=response.ok)

    logger.info(
        "API request completed",
        extra={
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "response_size_bytes": len(response.content),
        }
    )

    parsed = _decode_response(response)
    if not response.ok:
        raise APIError(response.status_code, parsed, url=url)
    return parsed


def get(path: str, client: Client, params: Optional[Mapping[str, Any]] = None) -> Any:
    """Make GET request and return JSON response."""
    return request("GET", path, params, client)


def post(path: str, client: Client, body: Optional[Mapping[str, Any]] = None) -> Any:
    """Make POST request and return JSON response."""
    return request("POST", path, body, client)


def patch(path: str, client: Client, body: Optional[Mapping[str, Any]] = None) -> Any:
    """Make PATCH request and return JSON response."""
    return request("PATCH", path, body, client)


def delete(path: str, client: Client, body: Optional[Mapping[str, Any]] = None) -> Any:
    """Make DELETE request and return JSON response."""
    return request("DELETE", path, body, client)
