"""Support counting for candidate itemsets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence, Set
from typing import TYPE_CHECKING

from .combinations import combinations

if TYPE_CHECKING:
    from .typing import Itemset, Transaction

logger = logging.getLogger(__name__)


class FrequencyTable(Mapping):
    """Occurrence counts keyed by itemset.

    A read-only mapping from ascending item tuples to counts, with
    :meth:`add` as the only way to record occurrences.  Iteration follows
    insertion order.

    Examples
    --------
    >>> table = FrequencyTable()
    >>> table.add((1, 2))
    >>> table.add((1, 2), 2)
    >>> table[(1, 2)]
    3
    """

    def __init__(self, counts: Mapping[Itemset, int] | Iterable[tuple[Itemset, int]] = ()) -> None:
        self._counts: dict[Itemset, int] = {}
        pairs = counts.items() if isinstance(counts, Mapping) else counts
        for itemset, n in pairs:
            self.add(itemset, n)

    def add(self, itemset: Sequence, n: int = 1) -> None:
        """Record *n* more occurrences of *itemset*."""
        if n < 0:
            raise ValueError(f"Cannot add a negative count. Got {n}.")
        key = tuple(itemset)
        self._counts[key] = self._counts.get(key, 0) + n

    def count(self, itemset: Sequence) -> int:
        """Return the count of *itemset*, ``0`` when it was never added."""
        return self._counts.get(tuple(itemset), 0)

    def merge(self, other: Mapping[Itemset, int]) -> FrequencyTable:
        """Return a new table whose counts are the sums of both tables."""
        merged = FrequencyTable(self)
        for itemset, n in other.items():
            merged.add(itemset, n)
        return merged

    def frequent(self, support: int) -> FrequencyTable:
        """Return a new table with only the entries counted at least *support* times."""
        return FrequencyTable((itemset, n) for itemset, n in self._counts.items() if n >= support)

    def __getitem__(self, itemset: Itemset) -> int:
        return self._counts[itemset]

    def __iter__(self) -> Iterator[Itemset]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, itemset: object) -> bool:
        return itemset in self._counts

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._counts!r})"


def count_items(transactions: Iterable[Transaction], support: int) -> FrequencyTable:
    """Count single items and keep those occurring in at least *support* transactions.

    Keys are singleton tuples, in ascending item order.
    """
    tally: dict = {}
    for transaction in transactions:
        for item in transaction:
            tally[item] = tally.get(item, 0) + 1

    frequent = FrequencyTable()
    for item in sorted(tally):
        if tally[item] >= support:
            frequent.add((item,), tally[item])

    logger.debug("Level 1: %d distinct items, %d frequent", len(tally), len(frequent))
    return frequent


def _count_shard(
    transactions: Sequence[Transaction],
    candidates: Set[Itemset],
    size: int,
) -> FrequencyTable:
    counts = FrequencyTable()
    for transaction in transactions:
        if len(transaction) < size:
            continue
        present = set(combinations(transaction, size))
        for itemset in present & candidates:
            counts.add(itemset)
    return counts


def count_candidates(
    transactions: Sequence[Transaction],
    candidates: Sequence[Itemset],
    size: int,
    support: int,
    n_shards: int = 1,
) -> FrequencyTable:
    """Count how many transactions contain each candidate ``size``-itemset.

    Every transaction is expanded into the set of its ``size``-combinations
    and each of them that is also a candidate gains one count, so a
    candidate is counted at most once per transaction.

    Parameters
    ----------
    transactions : Sequence
        Ascending transactions.
    candidates : Sequence[tuple]
        Candidate itemsets of length ``size``, as produced by
        :func:`apriorix.candidates.apriori_gen`.
    size : int
        Length of the candidates.
    support : int
        Minimum count for a candidate to be kept.
    n_shards : int, default=1
        Number of contiguous transaction shards counted separately and then
        merged by summing counts.  The result does not depend on it.

    Returns
    -------
    FrequencyTable
        Frequent ``size``-itemsets with their counts, in candidate order.
    """
    if not candidates:
        return FrequencyTable()
    if n_shards < 1:
        raise ValueError(f"`n_shards` must be a positive integer. Got {n_shards}.")

    candidates = [tuple(c) for c in candidates]
    shard_len = -(-len(transactions) // n_shards) or 1
    shards = [transactions[i : i + shard_len] for i in range(0, len(transactions), shard_len)]

    lookup = frozenset(candidates)
    # seed with zero counts so the table keeps candidate order
    counts = FrequencyTable((candidate, 0) for candidate in candidates)
    for shard in shards:
        for itemset, n in _count_shard(shard, lookup, size).items():
            counts.add(itemset, n)

    frequent = counts.frequent(support)
    logger.debug(
        "Level %d: %d candidates over %d shard(s), %d frequent",
        size,
        len(candidates),
        len(shards),
        len(frequent),
    )
    return frequent
