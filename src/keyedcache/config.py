from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "True", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Process-level defaults for stores and views.

    Notes:
    - `strict_numbers` turns off the int -> float narrowing, so a stored `5`
      no longer satisfies a request for `float`.
    - Individual stores can be given their own `Settings`; this only decides
      what they get when none is passed.
    """

    strict_numbers: bool = False


def load_settings() -> Settings:
    return Settings(
        strict_numbers=os.getenv("KEYEDCACHE_STRICT_NUMBERS", "0") in _TRUTHY,
    )


SETTINGS = load_settings()
