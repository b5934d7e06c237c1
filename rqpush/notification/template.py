"""Jinja2 template rendering for notification fields.

Templates use ``{{identifier}}`` placeholders bound against the
substitution map plus ``notification`` (the field being rendered).  A key
that is missing from the map renders as the empty string, and so does
any attribute or item looked up through it (``{{user.name}}``).  Structured
values can be iterated with ``{% for %}`` blocks.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import jinja2
from jinja2 import Template
from jinja2.sandbox import SandboxedEnvironment

from rqpush.notification.errors import TemplateRenderError
from rqpush.notification.substitutions import SubstitutionMap

logger = logging.getLogger(__name__)


def _finalize(value: Any) -> Any:
    """Render booleans as lowercase JSON literals and ``None`` as empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class TemplateEngine:
    """Compile and render notification templates in a sandbox."""

    def __init__(self, max_cache_size: int = 256) -> None:
        self.max_cache_size = max_cache_size
        self._env = SandboxedEnvironment(
            autoescape=False,
            undefined=jinja2.ChainableUndefined,
            finalize=_finalize,
            keep_trailing_newline=True,
        )
        self._cache: dict[str, Template] = {}

    def _compile(self, source: str) -> Template:
        template = self._cache.get(source)
        if template is None:
            template = self._env.from_string(source)
            if len(self._cache) >= self.max_cache_size:
                # Evict the oldest entry.
                self._cache.pop(next(iter(self._cache)))
            self._cache[source] = template
        return template

    def render(self, template: str, bindings: Mapping[str, Any]) -> str:
        """Render *template* against *bindings*.

        Raises
        ------
        TemplateRenderError
            If the template cannot be compiled or rendering fails.
        """
        try:
            return self._compile(template).render(dict(bindings))
        except jinja2.TemplateError as exc:
            raise TemplateRenderError(f"cannot render template: {exc}") from exc
        except (TypeError, ValueError, ArithmeticError, LookupError) as exc:
            raise TemplateRenderError(f"template evaluation failed: {exc}") from exc


_default_engine: TemplateEngine | None = None


def get_engine() -> TemplateEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine


def process_template(
    notification: str,
    template: str,
    values: SubstitutionMap,
    engine: TemplateEngine | None = None,
) -> str:
    """Bind *notification* into *values* and render *template*.

    Never raises: a template that fails to render is logged and yields
    ``""`` so delivery stays best-effort.
    """
    values.set("notification", notification)
    engine = engine or get_engine()
    try:
        return engine.render(template, values.as_dict())
    except TemplateRenderError as exc:
        logger.warning("Template rendering failed, using empty string: %s", exc)
        return ""
