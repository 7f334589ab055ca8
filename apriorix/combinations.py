"""Order-preserving combinations of a sequence.

Candidate counting and the Apriori prune step both need every ``k``-sized
sub-sequence of an itemset or transaction, in ascending position order.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .typing import Item


def combinations(sequence: Sequence[Item], size: int) -> Iterator[tuple[Item, ...]]:
    """Yield every ``size``-length sub-sequence of *sequence*.

    Positions ``i1 < i2 < ... < im`` are chosen in lexicographic order, so
    the relative order of the elements is preserved and combinations of an
    ascending sequence are themselves ascending.

    Parameters
    ----------
    sequence : Sequence
        The ordered input, e.g. a sorted transaction or a candidate itemset.
    size : int
        Length of the combinations. ``0`` yields one empty tuple; a size
        larger than the sequence yields nothing.

    Yields
    ------
    tuple
        One combination per iteration.

    Examples
    --------
    >>> list(combinations([1, 2, 3], 2))
    [(1, 2), (1, 3), (2, 3)]
    """
    if size < 0:
        raise ValueError(f"`size` must be a non-negative integer. Got {size}.")

    n = len(sequence)
    if size > n:
        return

    # indices[level] is the position chosen at depth `level`; a depth may
    # only go up to n - size + level, beyond that the tail cannot be filled.
    indices = list(range(size))
    while True:
        yield tuple(sequence[i] for i in indices)

        level = size - 1
        while level >= 0 and indices[level] == n - size + level:
            level -= 1
        if level < 0:
            return

        indices[level] += 1
        for deeper in range(level + 1, size):
            indices[deeper] = indices[deeper - 1] + 1
