"""Utility modules for the client.

Includes:
- Logging configuration
- Signing clock
- Canonical JSON codec
"""

from .logging_config import setup_logging, JsonFormatter
from .clock import timestamp, fixed_clock, Clock
from .codec import canonical_json, decode_json, EMPTY_BODY

__all__ = [
    "setup_logging",
    "JsonFormatter",
    "timestamp",
    "fixed_clock",
    "Clock",
    "canonical_json",
    "decode_json",
    "EMPTY_BODY",
]
