"""Fallback resolution of a Notification into an OutboundNotification.

Fields are filled in a fixed order, each step able to see what earlier
steps wrote into the substitution map:

1. title, through ``title_template`` (rendered title written back as
   ``{{title}}``)
2. url, empty when unset
3. category, empty when unset
4. tagline, the app name when unset (written back as ``{{tagline}}``)
5. short_text, through ``short_text_template``
6. short_html, the raw short_text when unset, through ``short_html_template``
7. long_text, the raw short_text when unset, through ``long_text_template``
8. long_html, the rendered long_text when unset, through ``long_html_template``

Any template left unset is assigned its default *on the Notification*, so
later resolutions reuse it.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rqpush.notification.envelope import OutboundNotification
from rqpush.notification.template import TemplateEngine, process_template

if TYPE_CHECKING:
    from rqpush.notification.notification import Notification

logger = logging.getLogger(__name__)


def sync_reserved_keys(notification: Notification) -> None:
    """Rewrite the reserved map keys from the Notification's fields."""
    values = notification.substitutions
    values.set("app", notification.app)
    values.set("url", notification.url or "")
    values.set("category", notification.category or "")
    values.set("tagline", notification.tagline or "")
    values.set("title", notification.title)
    values.set("lang", notification.lang)


def resolve(
    notification: Notification,
    *,
    priority: int = 0,
    ttl: int = 0,
    engine: TemplateEngine | None = None,
) -> OutboundNotification:
    """Fill every output field of *notification* and render it.

    Mutates *notification*: unset templates become their defaults and the
    substitution map receives the reserved keys.
    """
    n = notification
    defaults = n.defaults
    values = n.substitutions

    sync_reserved_keys(n)

    # 1. title
    if n.title_template is None:
        n.title_template = defaults.title_template
    title = process_template(n.title, n.title_template, values, engine)
    values.set("title", title)

    # 2-3. url, category
    url = n.url if n.url is not None else ""
    category = n.category if n.category is not None else ""

    # 4. tagline
    tagline = n.tagline if n.tagline is not None else n.app
    values.set("tagline", tagline)

    # 5. short_text
    if n.short_text_template is None:
        n.short_text_template = defaults.text_template
    short_text = process_template(n.short_text, n.short_text_template, values, engine)

    # 6. short_html
    short_html_source = n.short_html if n.short_html is not None else n.short_text
    if n.short_html_template is None:
        n.short_html_template = defaults.html_template
    short_html = process_template(short_html_source, n.short_html_template, values, engine)

    # 7. long_text
    long_text_source = n.long_text if n.long_text is not None else n.short_text
    if n.long_text_template is None:
        n.long_text_template = defaults.text_template
    long_text = process_template(long_text_source, n.long_text_template, values, engine)

    # 8. long_html
    long_html_source = n.long_html if n.long_html is not None else long_text
    if n.long_html_template is None:
        n.long_html_template = defaults.html_template
    long_html = process_template(long_html_source, n.long_html_template, values, engine)

    outbound = OutboundNotification(
        app=n.app,
        url=url,
        tagline=tagline,
        category=category,
        lang=n.lang,
        title=title,
        short_text=short_text,
        short_html=short_html,
        long_text=long_text,
        long_html=long_html,
        ttl=ttl,
        priority=priority,
    )
    logger.debug("Resolved outbound notification: %r", outbound)
    return outbound
