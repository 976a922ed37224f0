from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, Generic, Self, TypeVar

from ..config import Settings
from .store import KeyedCache

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Enum)
OtherK = TypeVar("OtherK", bound=Enum)
T = TypeVar("T")

JSONInput = bytes | bytearray | str


def _field_index(key_type: type[Enum]) -> dict[str, Enum]:
    if not (isinstance(key_type, type) and issubclass(key_type, Enum)):
        raise TypeError(f"keyed_by must be an Enum type, got {key_type!r}")
    return {m.value: m for m in key_type if isinstance(m.value, str)}


def _decode(data: JSONInput) -> Any:
    try:
        return json.loads(data)
    except (TypeError, ValueError, UnicodeError, RecursionError) as e:
        logger.debug("JSON decode failed, using empty view: %s", e)
        return None


def _encode(value: Any) -> str | None:
    try:
        return json.dumps(value)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug("Entry is not JSON serializable, no nested view: %s", e)
        return None


class JSONView(Generic[K]):
    """Decoded JSON object fields, addressed by the members of an Enum.

    Only top-level fields whose name equals a member value of `keyed_by` are
    kept; the rest of the document is dropped at construction. Nested objects
    and arrays are reached with `json()` / `array()` by naming the Enum for the
    next level. Each level is a fresh parse, so children never share storage
    with their parent.

    JSON `null` fields are treated as absent.
    """

    def __init__(
        self,
        keyed_by: type[K],
        initial_values: Mapping[K, Any] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        _field_index(keyed_by)
        self._key_type = keyed_by
        for k in initial_values or {}:
            self._check_key(k)
        self._store: KeyedCache[K] = KeyedCache(initial_values, settings=settings)

    # Construction

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        keyed_by: type[K],
        *,
        settings: Settings | None = None,
    ) -> "JSONView[K]":
        index = _field_index(keyed_by)
        values = {index[name]: value for name, value in mapping.items() if name in index}
        return cls(keyed_by, values, settings=settings)  # type: ignore[arg-type]

    @classmethod
    def from_bytes(
        cls,
        data: JSONInput,
        keyed_by: type[K],
        *,
        settings: Settings | None = None,
    ) -> "JSONView[K]":
        """Parse a JSON object; bad input yields an empty view."""
        payload = _decode(data)
        if not isinstance(payload, dict):
            if payload is not None:
                logger.debug("JSON document is %s, not an object; using empty view", type(payload).__name__)
            payload = {}
        return cls.from_mapping(payload, keyed_by, settings=settings)

    @classmethod
    def array_from(
        cls,
        data: JSONInput,
        keyed_by: type[K],
        *,
        settings: Settings | None = None,
    ) -> "list[JSONView[K]]":
        """Parse a JSON array of objects; non-object elements are skipped."""
        payload = _decode(data)
        if not isinstance(payload, list):
            return []
        out: list[JSONView[K]] = []
        for idx, item in enumerate(payload):
            if not isinstance(item, dict):
                logger.debug("Skipping non-object array element %d (%s)", idx, type(item).__name__)
                continue
            out.append(cls.from_mapping(item, keyed_by, settings=settings))
        return out

    @property
    def keyed_by(self) -> type[K]:
        return self._key_type

    def _check_key(self, key: Any) -> None:
        if not isinstance(key, self._key_type):
            raise TypeError(f"{key!r} is not a member of {self._key_type.__name__}")

    # Store contract

    def get(self, key: K, as_type: type[T] | Any = None) -> T | None:
        return self._store.get(key, as_type)

    def resolve(self, key: K, as_type: type[T] | Any = None) -> T:
        return self._store.resolve(key, as_type)

    def set(self, key: K, value: Any) -> None:
        self._check_key(key)
        self._store.set(key, value)

    def remove(self, key: K) -> None:
        self._store.remove(key)

    def contains(self, key: K) -> bool:
        return self._store.contains(key)

    def require_all(self, keys: Iterable[K]) -> Self:
        self._store.require_all(keys)
        return self

    def require(self, *keys: K) -> Self:
        return self.require_all(keys)

    def values_in_cache(self, of_type: type[T] | Any = None) -> dict[K, T]:
        return self._store.values_in_cache(of_type)

    def update(self, key: K, fn: Callable[[Any | None], Any | None]) -> Any | None:
        self._check_key(key)
        return self._store.update(key, fn)

    def snapshot(self) -> dict[K, Any]:
        return self._store.snapshot()

    # Nesting

    def json(
        self,
        key: K,
        keyed_by: type[OtherK],
    ) -> "JSONView[OtherK] | None":
        """Re-parse the object stored at `key` as a view over `keyed_by`."""
        value = self._store.get(key, dict)
        if value is None:
            return None
        encoded = _encode(value)
        if encoded is None:
            return None
        return JSONView.from_bytes(encoded, keyed_by, settings=self._store.settings)

    def array(
        self,
        key: K,
        keyed_by: type[OtherK],
    ) -> "list[JSONView[OtherK]] | None":
        value = self._store.get(key, list)
        if value is None:
            return None
        encoded = _encode(value)
        if encoded is None:
            return None
        return JSONView.array_from(encoded, keyed_by, settings=self._store.settings)

    def to_json(self) -> bytes:
        return json.dumps({k.value: v for k, v in self.snapshot().items()}).encode("utf-8")

    def __contains__(self, key: object) -> bool:
        return self._store.contains(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"JSONView[{self._key_type.__name__}]({self.snapshot()!r})"
