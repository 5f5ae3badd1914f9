"""JSON codec used for signing messages and response parsing."""

import json
from typing import Any, Mapping, Optional

# Signed bodies must serialize identically on both ends
CANONICAL_SEPARATORS = (",", ":")

EMPTY_BODY = "{}"


def canonical_json(body: Optional[Mapping[str, Any]]) -> str:
    """Serialize a request body to canonical JSON text.

    Keys are sorted and no whitespace is emitted, so the same mapping always
    yields the same text. ``None`` and empty mappings become ``"{}"``.

    Args:
        body: Request payload

    Returns:
        Canonical JSON text

    Raises:
        TypeError: If the body contains values JSON cannot represent
        ValueError: If the body contains circular references or NaN
    """
    if not body:
        return EMPTY_BODY

    return json.dumps(
        body,
        sort_keys=True,
        separators=CANONICAL_SEPARATORS,
        ensure_ascii=False,
        allow_nan=False,
    )


def decode_json(text: str) -> Any:
    """Parse JSON text. Empty text decodes to an empty dict."""
    if not text or not text.strip():
        return {}
    return json.loads(text)
