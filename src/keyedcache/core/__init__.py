from __future__ import annotations

from .errors import InvalidTypeError, KeyedCacheError, MissingRequiredKeysError
from .json_view import JSONView
from .narrowing import TypeErasedBox, narrow
from .registry import REGISTRY, StoreRegistry
from .store import Cache, Cacheable, KeyedCache

__all__ = [
    "KeyedCacheError",
    "MissingRequiredKeysError",
    "InvalidTypeError",
    "TypeErasedBox",
    "narrow",
    "Cacheable",
    "KeyedCache",
    "Cache",
    "JSONView",
    "StoreRegistry",
    "REGISTRY",
]
