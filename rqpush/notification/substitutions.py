"""Substitution map used to fill ``{{placeholder}}`` tokens.

Values are JSON-like: strings, numbers, booleans, ``None``, lists and
nested dicts.  Anything else is rejected at insertion time so the map can
always be serialized and handed to the template engine as plain data.
"""
from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from typing import Any, Union

SubstitutionValue = Union[str, int, float, bool, None, list, dict]

RESERVED_KEYS: tuple[str, ...] = (
    "app",
    "url",
    "category",
    "tagline",
    "title",
    "notification",
    "lang",
)


def _check_value(value: Any, path: str) -> None:
    if value is None or isinstance(value, (str, bool, int, float)):
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_value(item, f"{path}[{i}]")
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: nested keys must be str, got {type(key).__name__}")
            _check_value(item, f"{path}.{key}")
        return
    raise TypeError(f"{path}: unsupported substitution value type {type(value).__name__}")


def _normalize(value: Any) -> SubstitutionValue:
    if isinstance(value, tuple):
        return [_normalize(v) for v in value]
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _normalize(v) for k, v in value.items()}
    return value


class SubstitutionMap:
    """Mutable key -> JSON-like value store."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, SubstitutionValue] = {}
        if initial:
            self.update(initial)

    def set(self, key: str, value: Any) -> SubstitutionMap:
        """Insert or overwrite *key*."""
        if not isinstance(key, str):
            raise TypeError(f"substitution keys must be str, got {type(key).__name__}")
        _check_value(value, key)
        self._values[key] = _normalize(value)
        return self

    def update(self, mapping: Mapping[str, Any]) -> SubstitutionMap:
        for key, value in mapping.items():
            self.set(key, value)
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def as_dict(self) -> dict[str, SubstitutionValue]:
        """Return a deep copy suitable for rendering."""
        return copy.deepcopy(self._values)

    def __getitem__(self, key: str) -> SubstitutionValue:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SubstitutionMap):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"SubstitutionMap({self._values!r})"
