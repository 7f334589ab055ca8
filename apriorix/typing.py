from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar


class SupportsLessThan(Protocol):
    """Protocol for values usable as items.

    Items only need equality, hashing and a strict total order via ``<``;
    ints, strings and tuples of those all qualify.
    """

    def __lt__(self, other: Any, /) -> bool: ...


Item = TypeVar("Item", bound=SupportsLessThan)

#: An ascending tuple of distinct items.
Itemset = tuple[Any, ...]

#: An ascending sequence of distinct items, as supplied by the caller.
Transaction = Sequence[Any]
