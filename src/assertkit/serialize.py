"""Canonical structural rendering of arbitrary values."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

_PRIMITIVES = (str, int, float, bool, type(None))

TYPE_KEY = "__type__"


def _dump(value: Any) -> str:
    return json.dumps(value, sort_keys=True, ensure_ascii=False)


def _key(value: Any) -> str:
    if isinstance(value, str):
        return value
    return serialize(value)


def _normalize_mapping(value: Mapping) -> Any:
    out: dict[str, Any] = {}
    for k, v in value.items():
        key = _key(k)
        if key in out:
            # Two keys render alike (e.g. 1 and "1"); keep both as [key, value] pairs.
            pairs = [[_normalize(k), _normalize(v)] for k, v in value.items()]
            return sorted(pairs, key=_dump)
        out[key] = _normalize(v)
    return out


def _attributes(value: Any) -> dict[str, Any] | None:
    """Public attribute state of a plain object, or None if it has none."""
    state: dict[str, Any] | None = None
    if hasattr(value, "__dict__"):
        state = {k: v for k, v in vars(value).items() if not k.startswith("_")}
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("_") or not hasattr(value, name):
                continue
            state = state if state is not None else {}
            state.setdefault(name, getattr(value, name))
    return state or None


def _fallback(value: Any) -> Any:
    state = _attributes(value)
    if state is None:
        if type(value).__repr__ is object.__repr__:
            return f"<{type(value).__qualname__}>"
        return repr(value)
    return _normalize({TYPE_KEY: type(value).__qualname__, **state})


def _normalize(value: Any) -> Any:
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, Mapping):
        return _normalize_mapping(value)
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        # Sets have no order of their own; sort by each member's rendering.
        return [json.loads(s) for s in sorted(serialize(v) for v in value)]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _normalize({f.name: getattr(value, f.name) for f in dataclasses.fields(value)})
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump())
    return _normalize(to_jsonable_python(value, fallback=_fallback))


def serialize(value: Any) -> str:
    """Render ``value`` as a deterministic JSON string.

    Mapping keys are sorted, sequences keep their order, and sets are sorted by
    the rendering of their members. Plain objects render as their public
    attributes tagged with the class name, never by identity, so two
    structurally equal values always produce the same text regardless of how
    they were built.
    """
    return _dump(_normalize(value))
