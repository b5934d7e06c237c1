"""HTTP delivery of a ``Message`` to an rqueue intake endpoint.

One synchronous ``POST`` per call.  No retries and no interpretation of
the response: ``httpx`` exceptions reach the caller unchanged, and a
non-2xx response is returned as-is.
"""
from __future__ import annotations

import logging

import httpx

from rqpush.core.settings import get_settings
from rqpush.notification.envelope import Message

logger = logging.getLogger(__name__)


def post_message(
    endpoint: str,
    message: Message,
    *,
    timeout_s: float | None = None,
) -> httpx.Response:
    """POST *message* as JSON to *endpoint* and return the raw response."""
    if timeout_s is None:
        timeout_s = get_settings().timeout_s

    try:
        response = httpx.post(endpoint, json=message.to_wire(), timeout=timeout_s)
    except httpx.HTTPError as exc:
        logger.warning("Delivery to %s failed: %s", endpoint, exc)
        raise

    logger.info("Delivered message to %s (status %d)", endpoint, response.status_code)
    return response
