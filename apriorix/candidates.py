"""Candidate generation (``apriori-gen``) with the join and prune steps."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from .combinations import combinations

if TYPE_CHECKING:
    from .typing import Itemset


def has_infrequent_subset(candidate: Itemset, frequent: Collection[Itemset]) -> bool:
    """Return True if some ``(k-1)``-subset of *candidate* is not in *frequent*."""
    return any(subset not in frequent for subset in combinations(candidate, len(candidate) - 1))


def apriori_gen(frequent: Sequence[Itemset]) -> list[Itemset]:
    """Generate the candidate ``k``-itemsets from the frequent ``(k-1)``-itemsets.

    Parameters
    ----------
    frequent : Sequence[tuple]
        Frequent itemsets of one common length, each ascending, listed in
        ascending lexicographic order.

    Returns
    -------
    list[tuple]
        Candidates in join order.  Two itemsets ``a`` before ``b`` are
        joined into ``a + b[-1:]`` when they share all but their last item
        (any two singletons join); the candidate is dropped again when one
        of its ``(k-1)``-subsets is not frequent.

    Examples
    --------
    >>> apriori_gen([(1, 2), (1, 3), (1, 4), (2, 3)])
    [(1, 2, 3)]
    """
    frequent = [tuple(itemset) for itemset in frequent]
    lookup = frozenset(frequent)

    candidates: list[Itemset] = []
    for i, lhs in enumerate(frequent):
        prefix = lhs[:-1]
        for rhs in frequent[i + 1 :]:
            if len(lhs) > 1 and rhs[:-1] != prefix:
                continue
            candidate = lhs + rhs[-1:]
            if not has_infrequent_subset(candidate, lookup):
                candidates.append(candidate)
    return candidates
