"""Notification builder.

A ``Notification`` is a mutable draft: construct it with the three
required fields, adjust it through chained setters, then ``send()`` it.
Setters for ``app``, ``url``, ``tagline``, ``category``, ``lang`` and
``title`` also mirror the value into the substitution map so templates
can reference ``{{app}}``, ``{{url}}`` and so on.

Sending resolves every unset field (see ``rqpush.notification.resolver``).
Templates that were still unset are permanently assigned their defaults
at that point; build a new Notification to get a fresh resolution.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from rqpush.core.settings import get_settings
from rqpush.notification import resolver
from rqpush.notification.defaults import FALLBACK_DEFAULTS, NotificationDefaults, load_defaults
from rqpush.notification.envelope import Message, OutboundNotification, build_message
from rqpush.notification.errors import ConfigLoadError
from rqpush.notification.substitutions import SubstitutionMap
from rqpush.notification.template import TemplateEngine
from rqpush.notification.transport import post_message

logger = logging.getLogger(__name__)


class Notification:
    """Caller-owned notification draft."""

    def __init__(
        self,
        app: str,
        title: str,
        short_text: str,
        *,
        defaults: NotificationDefaults | None = None,
    ) -> None:
        if defaults is None:
            try:
                defaults = load_defaults()
            except ConfigLoadError as exc:
                logger.error("Cannot load notification defaults, using empty map: %s", exc)
                defaults = FALLBACK_DEFAULTS
        self.defaults = defaults
        self.substitutions = SubstitutionMap(defaults.mapping)

        self.app = app
        self.url: str | None = None
        self.tagline: str | None = None
        self.category: str | None = None
        lang = self.substitutions.get("lang")
        self.lang = "" if lang is None else str(lang)
        self.title = title
        self.title_template: str | None = None
        self.short_text = short_text
        self.short_text_template: str | None = None
        self.short_html: str | None = None
        self.short_html_template: str | None = None
        self.long_text: str | None = None
        self.long_text_template: str | None = None
        self.long_html: str | None = None
        self.long_html_template: str | None = None

    @classmethod
    def init(cls, app: str, title: str, short_text: str) -> Notification:
        """Create a notification with the minimum required fields.

        *app* is the app name, *title* a short summary (an email subject)
        and *short_text* the body (an email body).
        """
        return cls(app, title, short_text)

    def __repr__(self) -> str:
        return f"Notification(app={self.app!r}, title={self.title!r})"

    # -- mirrored fields ----------------------------------------------------

    def set_app(self, app: str) -> Notification:
        self.app = app
        self.substitutions.set("app", app)
        return self

    def set_url(self, url: str) -> Notification:
        self.url = url
        self.substitutions.set("url", url)
        return self

    def set_tagline(self, tagline: str) -> Notification:
        self.tagline = tagline
        self.substitutions.set("tagline", tagline)
        return self

    def set_category(self, category: str) -> Notification:
        self.category = category
        self.substitutions.set("category", category)
        return self

    def set_lang(self, lang: str) -> Notification:
        self.lang = lang
        self.substitutions.set("lang", lang)
        return self

    def set_title(self, title: str) -> Notification:
        self.title = title
        self.substitutions.set("title", title)
        return self

    # -- text and templates -------------------------------------------------

    def set_short_text(self, short_text: str) -> Notification:
        self.short_text = short_text
        return self

    def set_title_template(self, template: str) -> Notification:
        self.title_template = template
        return self

    def set_short_text_template(self, template: str) -> Notification:
        self.short_text_template = template
        return self

    def set_short_html(self, short_html: str) -> Notification:
        self.short_html = short_html
        return self

    def set_short_html_template(self, template: str) -> Notification:
        self.short_html_template = template
        return self

    def set_long_text(self, long_text: str) -> Notification:
        self.long_text = long_text
        return self

    def set_long_text_template(self, template: str) -> Notification:
        self.long_text_template = template
        return self

    def set_long_html(self, long_html: str) -> Notification:
        self.long_html = long_html
        return self

    def set_long_html_template(self, template: str) -> Notification:
        self.long_html_template = template
        return self

    # -- substitutions ------------------------------------------------------

    def add_value(self, key: str, value: Any) -> Notification:
        """Make ``{{key}}`` available to every template."""
        self.substitutions.set(key, value)
        return self

    def add_values(self, values: Mapping[str, Any]) -> Notification:
        self.substitutions.update(values)
        return self

    # -- output -------------------------------------------------------------

    def resolve(
        self,
        priority: int = 0,
        ttl: int = 0,
        *,
        engine: TemplateEngine | None = None,
    ) -> OutboundNotification:
        return resolver.resolve(self, priority=priority, ttl=ttl, engine=engine)

    def build_message(
        self,
        priority: int = 0,
        ttl: int = 0,
        shared_secret: str | None = None,
    ) -> Message:
        """Resolve this notification and wrap it in a digested envelope."""
        return build_message(self.resolve(priority=priority, ttl=ttl), shared_secret)

    def send(
        self,
        endpoint: str | None = None,
        priority: int = 0,
        ttl: int = 0,
        shared_secret: str | None = None,
    ) -> httpx.Response:
        """Resolve, digest and POST this notification.

        Parameters
        ----------
        endpoint:
            Intake URL.  Defaults to ``RQPUSH_ENDPOINT``.
        priority:
            0-255, higher is more urgent.
        ttl:
            Seconds the receiver may hold the notification; 0 means no
            expiry.
        shared_secret:
            Appended to the contents before digesting.  Defaults to
            ``RQPUSH_SHARED_SECRET``.

        Returns
        -------
        httpx.Response
            The intake's response, uninterpreted.  Transport errors from
            ``httpx`` propagate unchanged.
        """
        settings = get_settings()
        if shared_secret is None:
            shared_secret = settings.shared_secret
        message = self.build_message(priority=priority, ttl=ttl, shared_secret=shared_secret)
        return post_message(endpoint or settings.endpoint, message)
