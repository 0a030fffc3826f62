"""Canonical cache keys for argument tuples.

Two calls whose arguments are structurally equal produce equal keys. Every
leaf is tagged with its type name so that ``1``, ``1.0`` and ``True`` do not
collide, and dict entries are ordered by their canonical key rather than by
insertion order.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
import dataclasses
from typing import Any

from pydantic import BaseModel

from ..exceptions import UnhashableArgumentError

_KWARGS_MARK = ("kwargs",)


def make_key(args: tuple[Any, ...], kwargs: Mapping[str, Any] | None = None) -> Hashable:
    key: tuple[Hashable, ...] = tuple(_canonical(arg) for arg in args)
    if kwargs:
        key += (_KWARGS_MARK, _canonical(dict(kwargs)))
    return key


def _canonical(value: Any) -> Hashable:
    type_name = type(value).__qualname__
    if value is None or isinstance(value, (bool, int, float, complex, str, bytes)):
        return (type_name, value)
    if isinstance(value, (list, tuple)):
        return (type_name, tuple(_canonical(item) for item in value))
    if isinstance(value, Mapping):
        items = [(_canonical(k), _canonical(v)) for k, v in value.items()]
        items.sort(key=lambda pair: repr(pair[0]))
        return (type_name, tuple(items))
    if isinstance(value, (set, frozenset)):
        return (type_name, frozenset(_canonical(item) for item in value))
    if isinstance(value, BaseModel):
        return (type_name, _canonical(value.model_dump()))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        return (type_name, _canonical(fields))
    try:
        hash(value)
    except TypeError as exc:
        raise UnhashableArgumentError(
            f"Cannot build a cache key from argument of type {type_name}"
        ) from exc
    return (type_name, value)
