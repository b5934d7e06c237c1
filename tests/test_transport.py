"""Tests for rqpush/notification/transport.py — all HTTP calls are mocked."""
from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import httpx
import pytest

from rqpush.notification.envelope import Message
from rqpush.notification.transport import post_message


def _message() -> Message:
    return Message(sha256="abc", contents='{"app":"x"}', priority=1, ttl=2)


class TestPostMessage:
    @patch("rqpush.notification.transport.httpx.post")
    def test_posts_wire_body(self, mock_post):
        mock_post.return_value = MagicMock(status_code=200)

        post_message("http://queue:8000", _message(), timeout_s=3)

        mock_post.assert_called_once_with(
            "http://queue:8000",
            json={"sha256": "abc", "contents": '{"app":"x"}', "priority": 1, "ttl": 2},
            timeout=3,
        )

    @patch("rqpush.notification.transport.httpx.post")
    def test_timeout_defaults_to_settings(self, mock_post, monkeypatch):
        monkeypatch.setenv("RQPUSH_TIMEOUT_S", "2.5")
        mock_post.return_value = MagicMock(status_code=200)

        post_message("http://queue:8000", _message())

        assert mock_post.call_args.kwargs["timeout"] == 2.5

    @patch("rqpush.notification.transport.httpx.post")
    def test_single_attempt_on_error(self, mock_post, caplog):
        mock_post.side_effect = httpx.ReadTimeout("timed out")

        with caplog.at_level(logging.WARNING, logger="rqpush.notification.transport"):
            with pytest.raises(httpx.ReadTimeout):
                post_message("http://queue:8000", _message())

        assert mock_post.call_count == 1
        assert "Delivery to http://queue:8000 failed" in caplog.text

    @patch("rqpush.notification.transport.httpx.post")
    def test_response_returned_uninterpreted(self, mock_post):
        response = MagicMock(status_code=400)
        mock_post.return_value = response

        assert post_message("http://queue:8000", _message()) is response
