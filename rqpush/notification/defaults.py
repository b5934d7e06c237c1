"""Default template / substitution map loader.

Loads the default substitution map from ``templates/defaults.yaml`` (or
the file named by ``RQPUSH_DEFAULTS_PATH``) and returns a frozen
``NotificationDefaults``.  The file may also override the built-in title,
text and HTML templates.  Successful loads are cached per path, so the
configuration is read once and never changes afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from rqpush.core.settings import get_settings
from rqpush.notification.errors import ConfigLoadError
from rqpush.notification.substitutions import SubstitutionMap

DEFAULTS_FILE = Path(__file__).parent / "templates" / "defaults.yaml"

DEFAULT_TITLE_TEMPLATE = "{{notification}}"
DEFAULT_TEXT_TEMPLATE = "{{notification}}"
DEFAULT_HTML_TEMPLATE = '<html lang="{{lang}}"><body><p>{{notification}}</p></body></html>'

_BUILTIN_TEMPLATES: dict[str, str] = {
    "title_template": DEFAULT_TITLE_TEMPLATE,
    "text_template": DEFAULT_TEXT_TEMPLATE,
    "html_template": DEFAULT_HTML_TEMPLATE,
}


@dataclass(frozen=True)
class NotificationDefaults:
    """Fixed configuration every Notification starts from."""

    title_template: str
    text_template: str
    html_template: str
    mapping: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))


# Used when the configured defaults cannot be loaded: built-in templates,
# empty map.
FALLBACK_DEFAULTS = NotificationDefaults(
    title_template=DEFAULT_TITLE_TEMPLATE,
    text_template=DEFAULT_TEXT_TEMPLATE,
    html_template=DEFAULT_HTML_TEMPLATE,
    mapping={},
)


def _parse(path: Path) -> NotificationDefaults:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigLoadError(f"{path}: cannot read defaults: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(f"{path}: expected a YAML mapping, got {type(data).__name__}")

    # Template keys are optional overrides of the built-in templates.
    templates = dict(_BUILTIN_TEMPLATES)
    for name in _BUILTIN_TEMPLATES:
        if name not in data:
            continue
        if not isinstance(data[name], str):
            raise ConfigLoadError(f"{path}: {name} must be a string")
        templates[name] = data[name]

    mapping = data.get("mapping") or {}
    if not isinstance(mapping, dict):
        raise ConfigLoadError(f"{path}: mapping must be a YAML mapping")
    try:
        SubstitutionMap(mapping)
    except TypeError as exc:
        raise ConfigLoadError(f"{path}: mapping holds a non JSON-like value: {exc}") from exc

    return NotificationDefaults(
        mapping=mapping,
        **templates,
    )


@lru_cache(maxsize=8)
def _load_cached(path: str) -> NotificationDefaults:
    return _parse(Path(path))


def load_defaults(path: str | Path | None = None) -> NotificationDefaults:
    """Return the defaults stored at *path*.

    Falls back to ``RQPUSH_DEFAULTS_PATH`` and then to the packaged
    ``defaults.yaml``.

    Raises
    ------
    ConfigLoadError
        If the file is unreadable, not valid YAML, or malformed.
    """
    if path is None:
        path = get_settings().defaults_path or DEFAULTS_FILE
    return _load_cached(str(Path(path).resolve()))
