"""Tests for rqpush/notification/envelope.py."""
from __future__ import annotations

import hashlib
import json

import pytest
from pydantic import ValidationError

from rqpush.notification.envelope import (
    MAX_TTL,
    Message,
    OutboundNotification,
    build_message,
    generate_sha256,
    serialize,
)


def _outbound(**overrides) -> OutboundNotification:
    fields = dict(
        app="example",
        url="http://example.com/",
        tagline="tag",
        category="cat",
        lang="en",
        title="An example",
        short_text="short",
        short_html="<p>short</p>",
        long_text="long",
        long_html="<p>long</p>",
        ttl=60,
        priority=55,
    )
    fields.update(overrides)
    return OutboundNotification(**fields)


# ===========================================================================
# generate_sha256
# ===========================================================================

class TestGenerateSha256:
    def test_unsalted(self):
        assert generate_sha256("foo") == (
            "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae"
        )

    def test_salted_is_plain_concatenation(self):
        assert generate_sha256("foo", "bar") == (
            "c3ab8ff13720e8ad9047dd39466b3c8974e592c2fa383d4a3960714caef0c4f2"
        )
        assert generate_sha256("foo", "bar") == generate_sha256("foobar")

    def test_empty_secret_is_unsalted(self):
        assert generate_sha256("foo", "") == generate_sha256("foo")


# ===========================================================================
# serialize
# ===========================================================================

class TestSerialize:
    def test_field_order(self):
        contents = serialize(_outbound())
        assert list(json.loads(contents)) == [
            "app", "url", "tagline", "category", "lang", "title",
            "short_text", "short_html", "long_text", "long_html",
            "ttl", "priority",
        ]

    def test_compact_json(self):
        contents = serialize(_outbound(url="", category=""))
        assert contents.startswith('{"app":"example","url":"","tagline":"tag","category":""')
        assert contents.endswith('"ttl":60,"priority":55}')

    def test_unset_strings_are_empty(self):
        data = json.loads(serialize(OutboundNotification()))
        assert data["url"] == ""
        assert data["ttl"] == 0
        assert data["priority"] == 0


# ===========================================================================
# build_message
# ===========================================================================

class TestBuildMessage:
    def test_digest_covers_contents(self):
        message = build_message(_outbound())
        expected = hashlib.sha256(message.contents.encode()).hexdigest()
        assert message.sha256 == expected

    def test_digest_salted_with_secret(self):
        message = build_message(_outbound(), shared_secret="s3cr3t")
        expected = hashlib.sha256(message.contents.encode() + b"s3cr3t").hexdigest()
        assert message.sha256 == expected

    def test_contents_round_trips_to_outbound(self):
        outbound = _outbound()
        message = build_message(outbound)
        assert OutboundNotification.model_validate_json(message.contents) == outbound

    @pytest.mark.parametrize("priority", [0, 1, 128, 254, 255])
    @pytest.mark.parametrize("ttl", [0, 1, 60, MAX_TTL])
    def test_priority_and_ttl_carried_unchanged(self, priority, ttl):
        message = build_message(_outbound(priority=priority, ttl=ttl))
        assert message.priority == priority
        assert message.ttl == ttl
        data = json.loads(message.contents)
        assert data["priority"] == priority
        assert data["ttl"] == ttl

    def test_wire_format(self):
        message = build_message(_outbound(), shared_secret="x")
        wire = message.to_wire()
        assert set(wire) == {"sha256", "contents", "priority", "ttl"}
        assert isinstance(wire["contents"], str)
        assert json.loads(json.dumps(wire)) == wire

    def test_message_allows_null_metadata(self):
        wire = Message(contents="{}").to_wire()
        assert wire == {"sha256": None, "contents": "{}", "priority": None, "ttl": None}


# ===========================================================================
# Range checks
# ===========================================================================

class TestRanges:
    @pytest.mark.parametrize("priority", [-1, 256])
    def test_priority_out_of_range(self, priority):
        with pytest.raises(ValidationError):
            _outbound(priority=priority)

    @pytest.mark.parametrize("ttl", [-1, MAX_TTL + 1])
    def test_ttl_out_of_range(self, ttl):
        with pytest.raises(ValidationError):
            _outbound(ttl=ttl)

    def test_outbound_is_frozen(self):
        outbound = _outbound()
        with pytest.raises(ValidationError):
            outbound.title = "changed"
