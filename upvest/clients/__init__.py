"""HTTP transport for the Upvest API.

Handles:
- Authentication header merging
- Body encoding (JSON, form, query string)
- Error mapping to ``HttpError``
- Request timing
"""

from .base import request, get, post, patch, delete

__all__ = ["request", "get", "post", "patch", "delete"]
