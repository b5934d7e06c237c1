#!/usr/bin/env python3
"""Send example notifications to a local rqueue intake.

Usage:
    python scripts/send_example.py fields
    python scripts/send_example.py template
    python scripts/send_example.py ttl
    python scripts/send_example.py shared-secret
    RQPUSH_ENDPOINT=http://queue:8000 python scripts/send_example.py fields
"""
from __future__ import annotations

import argparse
import sys

import httpx

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from rqpush.core.logging import setup_logging
from rqpush.core.settings import get_settings
from rqpush.notification.notification import Notification


def _base() -> Notification:
    return Notification.init("Example", "An example", "This is an example notification.")


def send_fields(endpoint: str) -> httpx.Response:
    notification = _base().set_category("example").set_url("http://example.com/")
    return notification.send(endpoint, 55, 0)


def send_template(endpoint: str) -> httpx.Response:
    # Renders as "[Example]: This is an example notification. (3)"
    notification = _base()
    notification.set_short_text_template("[{{app}}]: {{notification}} ({{integer}})")
    notification.add_value("integer", 3)
    return notification.send(endpoint, 55, 0)


def send_ttl(endpoint: str) -> httpx.Response:
    # Dropped by the queue if not delivered within 60 seconds.
    return _base().send(endpoint, 100, 60)


def send_shared_secret(endpoint: str) -> httpx.Response:
    # Only accepted by a queue configured with the same secret.
    return _base().send(endpoint, 122, 0, "foo")


EXAMPLES = {
    "fields": send_fields,
    "template": send_template,
    "ttl": send_ttl,
    "shared-secret": send_shared_secret,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("example", choices=sorted(EXAMPLES))
    parser.add_argument("--endpoint", default=None, help="intake URL (default: RQPUSH_ENDPOINT)")
    parser.add_argument("--verbose", action="store_true", help="log at DEBUG level")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)
    endpoint = args.endpoint or get_settings().endpoint
    try:
        response = EXAMPLES[args.example](endpoint)
    except httpx.HTTPError as exc:
        print(f"Failure: {exc!r}")
        return 1
    print(f"Success: {response.status_code} {response.text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
