"""Exception types raised inside the notification pipeline.

Transport failures are not wrapped: the ``httpx`` exception reaches the
caller as raised.
"""
from __future__ import annotations


class RqpushError(Exception):
    """Base class for rqpush errors."""


class ConfigLoadError(RqpushError, ValueError):
    """Raised when the default template / mapping file cannot be loaded."""


class TemplateRenderError(RqpushError):
    """Raised when a template fails to compile or render."""
