from __future__ import annotations

from .config import SETTINGS, Settings, load_settings
from .core import (
    REGISTRY,
    Cache,
    Cacheable,
    InvalidTypeError,
    JSONView,
    KeyedCache,
    KeyedCacheError,
    MissingRequiredKeysError,
    StoreRegistry,
    TypeErasedBox,
    narrow,
)
from .core.registry import contains, get, resolve, set, update
from .transforms import BiDirectionalTransformation, UniDirectionalTransformation, transformer

__all__ = [
    "Settings",
    "SETTINGS",
    "load_settings",
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
    "contains",
    "get",
    "resolve",
    "set",
    "update",
    "transformer",
    "UniDirectionalTransformation",
    "BiDirectionalTransformation",
]
