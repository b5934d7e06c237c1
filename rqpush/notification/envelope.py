"""Envelope construction: outbound record, serialization and digest.

The ``sha256`` field is ``SHA-256(contents ++ shared_secret)``: plain byte
concatenation, not an HMAC.  It only keeps casual spam out of a receiving
queue configured with the same secret; it is open to length-extension and
is not an authentication mechanism.
"""
from __future__ import annotations

import hashlib
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MAX_PRIORITY = 255
MAX_TTL = 2**32 - 1


class OutboundNotification(BaseModel):
    """Fully resolved notification, as delivered inside ``contents``."""

    model_config = ConfigDict(frozen=True)

    app: str = ""
    url: str = ""
    tagline: str = ""
    category: str = ""
    lang: str = ""
    title: str = ""
    short_text: str = ""
    short_html: str = ""
    long_text: str = ""
    long_html: str = ""
    ttl: int = Field(default=0, ge=0, le=MAX_TTL)
    priority: int = Field(default=0, ge=0, le=MAX_PRIORITY)


class Message(BaseModel):
    """Transport envelope POSTed to the intake endpoint."""

    model_config = ConfigDict(frozen=True)

    sha256: str | None = None
    contents: str
    priority: int | None = Field(default=None, ge=0, le=MAX_PRIORITY)
    ttl: int | None = Field(default=None, ge=0, le=MAX_TTL)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body sent to the intake endpoint."""
        return self.model_dump(mode="json")


def serialize(outbound: OutboundNotification) -> str:
    """Compact JSON with fields in declaration order."""
    return outbound.model_dump_json()


def generate_sha256(contents: str, shared_secret: str | None = None) -> str:
    """Return the hex digest of *contents*, salted with *shared_secret* if given."""
    digest = hashlib.sha256()
    digest.update(contents.encode("utf-8"))
    if shared_secret:
        digest.update(shared_secret.encode("utf-8"))
    return digest.hexdigest()


def build_message(
    outbound: OutboundNotification,
    shared_secret: str | None = None,
) -> Message:
    """Serialize *outbound*, digest it and wrap it in a ``Message``."""
    contents = serialize(outbound)
    message = Message(
        sha256=generate_sha256(contents, shared_secret),
        contents=contents,
        priority=outbound.priority,
        ttl=outbound.ttl,
    )
    logger.debug(
        "Built message for app %r (priority=%d ttl=%d salted=%s)",
        outbound.app,
        outbound.priority,
        outbound.ttl,
        bool(shared_secret),
    )
    return message
