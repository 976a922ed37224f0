from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from .errors import InvalidTypeError, MissingRequiredKeysError
from .narrowing import TypeErasedBox
from .store import Cacheable

logger = logging.getLogger(__name__)

S = TypeVar("S")


def _check_store(value: Any) -> None:
    if not isinstance(value, Cacheable):
        raise TypeError(f"Only store objects can be registered, got {type(value).__name__}")


class StoreRegistry:
    """Named stores shared across modules that hold no reference to each other.

    Stores are boxed on `set` and narrowed back to the requested store type on
    `get`/`resolve`. Replacing an id swaps the whole store; nothing is merged.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._stores: dict[Hashable, TypeErasedBox] = {}

    def contains(self, store_id: Hashable) -> bool:
        with self._lock:
            return store_id in self._stores

    def get(self, store_id: Hashable, as_type: type[S] | Any = None) -> S | None:
        with self._lock:
            box = self._stores.get(store_id)
        if box is None:
            return None
        return box.narrow(as_type)

    def resolve(self, store_id: Hashable, as_type: type[S] | Any = None) -> S:
        with self._lock:
            box = self._stores.get(store_id)
        if box is None:
            raise MissingRequiredKeysError({store_id})
        store = box.narrow(as_type)
        if store is None:
            raise InvalidTypeError(as_type, box.value, key=store_id)
        return store

    def set(self, store_id: Hashable, store: Any) -> None:
        _check_store(store)
        box = TypeErasedBox.wrap(store)
        with self._lock:
            previous = self._stores.get(store_id)
            self._stores[store_id] = box
        if previous is not None and previous.value is not store:
            logger.debug("Replaced store %r (%s -> %s)", store_id, previous.value_type.__name__, box.value_type.__name__)

    def update(
        self,
        store_id: Hashable,
        fn: Callable[[Any | None], Any],
        as_type: type[S] | Any = None,
    ) -> S:
        """Publish `fn(current)` under `store_id` without racing other writers.

        `fn` runs while the registry lock is held. It gets the current store
        narrowed to `as_type` (None when absent or of another type) and must
        return a store.
        """
        with self._lock:
            box = self._stores.get(store_id)
            current = box.narrow(as_type) if box is not None else None
            store = fn(current)
            _check_store(store)
            self._stores[store_id] = TypeErasedBox.wrap(store)
            return store

    def ids(self) -> list[Hashable]:
        with self._lock:
            return list(self._stores)


# Created at import; lives until process exit.
REGISTRY = StoreRegistry()


def contains(store_id: Hashable) -> bool:
    return REGISTRY.contains(store_id)


def get(store_id: Hashable, as_type: type[S] | Any = None) -> S | None:
    return REGISTRY.get(store_id, as_type)


def resolve(store_id: Hashable, as_type: type[S] | Any = None) -> S:
    return REGISTRY.resolve(store_id, as_type)


def set(store_id: Hashable, store: Any) -> None:
    REGISTRY.set(store_id, store)


def update(store_id: Hashable, fn: Callable[[Any | None], Any], as_type: type[S] | Any = None) -> S:
    return REGISTRY.update(store_id, fn, as_type)
