from __future__ import annotations

from collections.abc import Callable
from typing import Generic, NamedTuple, TypeVar, overload

From = TypeVar("From")
To = TypeVar("To")

UniDirectionalTransformation = Callable[[From], To]


class BiDirectionalTransformation(NamedTuple, Generic[From, To]):
    """A pair of functions converting `From -> To` (`from_`) and back (`to`)."""

    from_: Callable[[From], To]
    to: Callable[[To], From]


@overload
def transformer(from_: Callable[[From], To]) -> Callable[[From], To]: ...
@overload
def transformer(from_: Callable[[From], To], to: Callable[[To], From]) -> BiDirectionalTransformation[From, To]: ...


def transformer(from_, to=None):
    if to is None:
        return from_
    return BiDirectionalTransformation(from_=from_, to=to)
