"""Command line entrypoint: inspect or send an authenticated request.

Usage:
    python -m upvest.cli --method GET --path /kms/wallets/
    python -m upvest.cli --method POST --path /kms/wallets/ --body '{"asset_ids": []}' --send
"""

import argparse
import json
import logging
import sys
from typing import Optional

from upvest.auth.base import get_headers
from upvest.client import Client
from upvest.clients.base import request
from upvest.errors import UpvestError
from upvest.utils import setup_logging

logger = logging.getLogger(__name__)

# Header values printed as-is; everything else is masked
VISIBLE_HEADERS = {
    "Content-Type",
    "Cache-Control",
    "User-Agent",
    "X-UP-API-Key",
    "X-UP-API-Signature",
    "X-UP-API-Timestamp",
    "X-UP-API-Signed-Path",
}


def mask_headers(headers: dict) -> dict:
    """Replace secret header values with ``***``."""
    return {
        name: value if name in VISIBLE_HEADERS else "***"
        for name, value in headers.items()
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute Upvest auth headers for a request, or send it"
    )
    parser.add_argument(
        "--method",
        type=str.upper,
        choices=["GET", "POST", "PATCH", "PUT", "DELETE"],
        default="GET",
        help="HTTP method (default: GET)",
    )
    parser.add_argument(
        "--path",
        required=True,
        help="Unversioned API path (e.g., /kms/wallets/)",
    )
    parser.add_argument(
        "--body",
        type=str,
        default="{}",
        help="Request body as JSON text (default: {})",
    )
    parser.add_argument(
        "--send",
        action="store_true",
        help="Send the request and print the response instead of the headers",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, json_format=args.json_logs)

    try:
        body = json.loads(args.body)
    except ValueError as e:
        print(f"Invalid --body JSON: {e}", file=sys.stderr)
        return 2
    if not isinstance(body, dict):
        print("--body must be a JSON object", file=sys.stderr)
        return 2

    try:
        client = Client.from_env()
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        if args.send:
            result = request(args.method, args.path, body, client)
        else:
            headers = {**client.headers, **get_headers(client, args.method, args.path, body)}
            result = mask_headers(headers)
    except UpvestError as e:
        logger.error(f"Request failed: {e}", extra={"error_type": type(e).__name__})
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
