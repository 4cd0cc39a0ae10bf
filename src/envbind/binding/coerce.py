"""Coercion engine: turn one environment string into a typed value.

Dispatch order is fixed: a ``set`` method wins over ``unmarshal_text``,
both win over the built-in rules, and container element types go back
through :func:`coerce` so custom parsing is honoured at every depth.
"""

from __future__ import annotations

import dataclasses
import types
from datetime import datetime, timedelta
from typing import Annotated, Any, Protocol, Union, get_args, get_origin, runtime_checkable

from pydantic import BaseModel

from envbind.binding import literals
from envbind.errors import InvalidMapItem
from envbind.models.types import Bits


class _Missing:
    def __repr__(self) -> str:
        return "<unset>"

    __str__ = __repr__


# Marks a destination that holds no value yet, e.g. a required field of a
# pydantic model built with model_construct().
MISSING: Any = _Missing()

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


@runtime_checkable
class Setter(Protocol):
    """Implemented by types that parse themselves from a string."""

    def set(self, value: str) -> None: ...


@runtime_checkable
class TextUnmarshaler(Protocol):
    """Implemented by types that parse themselves from raw text bytes."""

    def unmarshal_text(self, text: bytes) -> None: ...


def unwrap_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if get_origin(tp) is Annotated:
        base, *extras = get_args(tp)
        inner, inner_extras = unwrap_annotated(base)
        return inner, tuple(inner_extras) + tuple(extras)
    return tp, ()


def optional_inner(tp: Any) -> Any | None:
    """Return ``T`` for ``Optional[T]`` / ``T | None``, else ``None``."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1 and len(get_args(tp)) == 2:
            return args[0]
    return None


def is_record_type(tp: Any) -> bool:
    return isinstance(tp, type) and (
        dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)
    )


def has_capability(tp: Any) -> bool:
    """True when instances of *tp* expose ``set`` or ``unmarshal_text``."""
    return isinstance(tp, type) and (
        callable(getattr(tp, "set", None)) or callable(getattr(tp, "unmarshal_text", None))
    )


def allocate(tp: type) -> Any:
    """Build a zero instance of *tp*; pydantic models skip validation."""
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return tp.model_construct()
    return tp()


def type_name(tp: Any) -> str:
    base, _ = unwrap_annotated(tp)
    if isinstance(base, type) and get_origin(base) is None:
        return base.__name__
    return str(base).replace("typing.", "")


def coerce(raw: str, tp: Any, current: Any = MISSING) -> Any:
    """Convert *raw* into a value of type *tp* and return it.

    *current* is the value the destination holds now; capability types are
    mutated in place when it is an instance. Unsupported types return
    *current* untouched (``None`` when there is none).
    """
    base, extras = unwrap_annotated(tp)
    bits = next((e for e in extras if isinstance(e, Bits)), None)

    # Capabilities first: the held instance, then the type.
    for method in ("set", "unmarshal_text"):
        target = _capability_target(base, current, method)
        if target is not None:
            arg = raw if method == "set" else raw.encode()
            getattr(target, method)(arg)
            return target

    inner = optional_inner(base)
    if inner is not None:
        held = MISSING if current is MISSING or current is None else current
        return coerce(raw, inner, held)

    if base is str:
        return raw
    if base is bool:
        return literals.parse_bool(raw)
    if base is timedelta:
        return literals.parse_duration(raw)
    if base is datetime:
        return literals.parse_timestamp(raw)
    if base is int:
        if bits is not None and not bits.signed:
            return literals.parse_uint(raw, bits)
        return literals.parse_int(raw, bits)
    if base is float:
        return literals.parse_float(raw, bits)

    origin = get_origin(base) or base
    if origin in _SEQUENCE_TYPES and _is_homogeneous(base, origin):
        return _coerce_sequence(raw, base, origin)
    if origin is dict:
        return _coerce_mapping(raw, base)

    return None if current is MISSING else current


def _capability_target(base: Any, current: Any, method: str) -> Any | None:
    if current is not MISSING and current is not None and callable(getattr(current, method, None)):
        return current
    if isinstance(base, type) and callable(getattr(base, method, None)):
        return allocate(base)
    return None


def _is_homogeneous(base: Any, origin: type) -> bool:
    # Fixed-shape tuples such as tuple[str, int] are not handled.
    args = get_args(base)
    return origin is not tuple or not args or (len(args) == 2 and args[1] is Ellipsis)


def _coerce_sequence(raw: str, base: Any, origin: type) -> Any:
    args = get_args(base)
    elem = args[0] if args else str
    if raw == "":
        return origin()
    return origin(coerce(item, elem) for item in raw.split(","))


def _coerce_mapping(raw: str, base: Any) -> dict[Any, Any]:
    key_type, value_type = get_args(base) or (str, str)
    result: dict[Any, Any] = {}
    if not raw.strip():
        return result
    for pair in raw.split(","):
        parts = pair.split(":")
        if len(parts) != 2:
            raise InvalidMapItem(pair)
        result[coerce(parts[0], key_type)] = coerce(parts[1], value_type)
    return result
