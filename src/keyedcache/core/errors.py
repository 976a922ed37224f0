from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any


class KeyedCacheError(Exception):
    """Base class for failures surfaced by `resolve`/`require`."""


class MissingRequiredKeysError(KeyedCacheError, LookupError):
    def __init__(self, keys: Iterable[Hashable]) -> None:
        self.keys: frozenset[Hashable] = frozenset(keys)
        super().__init__(self.keys)

    def __str__(self) -> str:
        rendered = ", ".join(sorted(repr(k) for k in self.keys))
        return f"Missing required keys: {{{rendered}}}"


class InvalidTypeError(KeyedCacheError, TypeError):
    def __init__(self, expected_type: Any, actual_value: Any, *, key: Hashable | None = None) -> None:
        self.expected_type = expected_type
        self.actual_value = actual_value
        self.key = key
        super().__init__(expected_type, actual_value)

    def __str__(self) -> str:
        expected = getattr(self.expected_type, "__name__", None) or repr(self.expected_type)
        actual = f"{self.actual_value!r} ({type(self.actual_value).__name__})"
        where = f" for key {self.key!r}" if self.key is not None else ""
        return f"Expected value of type {expected}{where}, found {actual}"
