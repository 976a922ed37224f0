from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, TypeVar, Union, get_args, get_origin

T = TypeVar("T")


def _matches_any(as_type: Any) -> bool:
    return as_type is None or as_type is object or as_type is Any


def narrow(value: Any, as_type: Any = None, *, strict_numbers: bool = False) -> Any | None:
    """Return `value` viewed as `as_type`, or None when it does not fit.

    `None` is absence and never narrows. `bool` is kept apart from the numeric
    types, and an `int` narrows to `float` (converted) unless `strict_numbers`.
    Parameterized generics are checked against their origin class only, and a
    union narrows when any member does.
    """
    if value is None:
        return None
    if _matches_any(as_type):
        return value
    origin = get_origin(as_type)
    if origin is Union or origin is types.UnionType:
        as_type = get_args(as_type)
    if isinstance(as_type, tuple):
        for candidate in as_type:
            out = narrow(value, candidate, strict_numbers=strict_numbers)
            if out is not None:
                return out
        return None

    target = origin if isinstance(origin, type) else as_type
    if not isinstance(target, type):
        raise TypeError(f"Cannot narrow to {as_type!r}: not a type")

    if isinstance(value, bool) and target in (int, float):
        return None
    if target is float and isinstance(value, int) and not strict_numbers:
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, target):
        return value
    return None


@dataclass(frozen=True)
class TypeErasedBox:
    """An arbitrary value plus the runtime type it had when boxed."""

    value: Any
    value_type: type

    @classmethod
    def wrap(cls, value: Any) -> "TypeErasedBox":
        return cls(value=value, value_type=type(value))

    def narrow(self, as_type: Any = None) -> Any | None:
        return narrow(self.value, as_type, strict_numbers=True)
