from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, Generic, Protocol, Self, TypeVar, runtime_checkable

from ..config import SETTINGS, Settings
from .errors import InvalidTypeError, MissingRequiredKeysError
from .narrowing import narrow

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@runtime_checkable
class Cacheable(Protocol):
    """Operations shared by every keyed store (plain caches and JSON views)."""

    def get(self, key: Any, as_type: Any = None) -> Any | None: ...
    def resolve(self, key: Any, as_type: Any = None) -> Any: ...
    def set(self, key: Any, value: Any) -> None: ...
    def remove(self, key: Any) -> None: ...
    def contains(self, key: Any) -> bool: ...
    def require(self, *keys: Any) -> Self: ...
    def values_in_cache(self, of_type: Any = None) -> dict[Any, Any]: ...


class KeyedCache(Generic[K]):
    """Lock-protected mapping from `K` to values of any type.

    Values are stored as-is and recovered through `narrow`, so a request for a
    type the stored value does not fit reads as absent in `get` and as an
    `InvalidTypeError` in `resolve`.

    Notes:
    - Storing `None` removes the key. There is no separate "present but empty"
      state to unwrap on read.
    - Each call takes the lock once. Sequences of calls are not atomic; use
      `update` for read-modify-write.
    """

    def __init__(
        self,
        initial_values: Mapping[K, Any] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._settings = settings or SETTINGS
        self._entries: dict[K, Any] = {
            k: v for k, v in (initial_values or {}).items() if v is not None
        }

    @property
    def settings(self) -> Settings:
        return self._settings

    def _narrow(self, value: Any, as_type: Any) -> Any | None:
        return narrow(value, as_type, strict_numbers=self._settings.strict_numbers)

    def get(self, key: K, as_type: type[T] | Any = None) -> T | None:
        """Return the value for `key`, or None when absent or not narrowable."""
        with self._lock:
            value = self._entries.get(key)
        return self._narrow(value, as_type)

    def resolve(self, key: K, as_type: type[T] | Any = None) -> T:
        """Return the value for `key` or raise.

        Raises `MissingRequiredKeysError` when the key is absent and
        `InvalidTypeError` when the stored value does not narrow to `as_type`.
        """
        with self._lock:
            if key not in self._entries:
                raise MissingRequiredKeysError({key})
            value = self._entries[key]
        out = self._narrow(value, as_type)
        if out is None:
            raise InvalidTypeError(as_type, value, key=key)
        return out

    def set(self, key: K, value: Any) -> None:
        with self._lock:
            if value is None:
                self._entries.pop(key, None)
            else:
                self._entries[key] = value

    def remove(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def contains(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    def require_all(self, keys: Iterable[K]) -> Self:
        wanted = list(keys)
        with self._lock:
            missing = [k for k in wanted if k not in self._entries]
        if missing:
            raise MissingRequiredKeysError(missing)
        return self

    def require(self, *keys: K) -> Self:
        """Raise `MissingRequiredKeysError` naming every absent key, else return self."""
        return self.require_all(keys)

    def values_in_cache(self, of_type: type[T] | Any = None) -> dict[K, T]:
        with self._lock:
            items = list(self._entries.items())
        out: dict[K, T] = {}
        for k, v in items:
            narrowed = self._narrow(v, of_type)
            if narrowed is not None:
                out[k] = narrowed
        return out

    def update(self, key: K, fn: Callable[[Any | None], Any | None]) -> Any | None:
        """Atomically replace the value at `key` with `fn(current)`.

        `fn` runs while the lock is held and sees None for an absent key.
        Returning None removes the entry.
        """
        with self._lock:
            new_value = fn(self._entries.get(key))
            self.set(key, new_value)
            return new_value

    def snapshot(self) -> dict[K, Any]:
        with self._lock:
            return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()!r})"


class Cache(KeyedCache[Hashable]):
    """A `KeyedCache` over arbitrary hashable keys."""
