"""Input validation at the public entry points."""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

_NO_ITEM = object()


def valid_support_check(support: Any) -> None:
    """Validate an absolute support threshold (a transaction count)."""
    if isinstance(support, bool) or not isinstance(support, (int, np.integer)):
        raise TypeError(f"`support` must be an integer transaction count. Got {support!r}.")
    if support < 1:
        raise ValueError(f"`support` must be at least 1. Got {support}.")


def valid_min_support_check(min_support: float) -> None:
    """Validate a relative support threshold."""
    if not 0.0 < min_support <= 1.0:
        raise ValueError(
            "`min_support` must be a positive "
            "number within the interval `(0, 1]`. "
            "Got %s." % min_support
        )


def valid_max_len_check(max_len: int | None) -> None:
    if max_len is not None and max_len < 1:
        raise ValueError(f"`max_len` must be a positive integer or None. Got {max_len}.")


def valid_transactions_check(transactions: Sequence[Sequence[Any]]) -> None:
    """Check that every transaction is strictly ascending.

    Strictly ascending means sorted with no repeated item, which is what the
    join step relies on.  Unsorted input would otherwise produce silently
    wrong counts.

    Raises
    ------
    TypeError
        If a transaction is a string, or items of a transaction cannot be
        compared with each other or with the items of earlier transactions.
    ValueError
        If a transaction is unsorted or repeats an item.
    """
    reference: Any = _NO_ITEM
    for idx, transaction in enumerate(transactions):
        if isinstance(transaction, (str, bytes)):
            raise TypeError(
                f"Transaction {idx} is a string ({transaction!r}); "
                "pass a sequence of items such as a list."
            )
        items = list(transaction)
        if not items:
            continue
        if reference is _NO_ITEM:
            reference = items[0]
        else:
            # items of all transactions share one order
            try:
                reference < items[0]  # noqa: B015
            except TypeError as exc:
                raise TypeError(
                    f"Items of transaction {idx} cannot be ordered against earlier transactions: "
                    f"{items[0]!r} and {reference!r}."
                ) from exc
        for prev, item in zip(items, items[1:]):
            try:
                ascending = prev < item
            except TypeError as exc:
                raise TypeError(
                    f"Items of transaction {idx} cannot be ordered: {prev!r} and {item!r}."
                ) from exc
            if ascending:
                continue
            if prev == item:
                raise ValueError(
                    f"Transaction {idx} contains the item {item!r} more than once. "
                    "Use `apriorix.sort_transactions` to deduplicate and sort the input."
                )
            raise ValueError(
                f"Transaction {idx} is not sorted: {prev!r} comes before {item!r}. "
                "Use `apriorix.sort_transactions` to deduplicate and sort the input."
            )


def valid_input_check(df: pd.DataFrame, null_values: bool = False) -> None:
    """Validate a one-hot / boolean DataFrame before mining.

    Parameters
    ----------
    df:
        Input DataFrame.  Allowed values: 0/1 or True/False (and NaN if
        ``null_values=True``).
    null_values:
        Whether NaN values are allowed in *df*.
    """
    if df is None:
        return

    if df.size == 0:
        return

    # Fast path: all bool columns
    if null_values:
        all_bools = (
            df.apply(lambda col: col.apply(lambda x: pd.isna(x) or isinstance(x, bool)))
            .all()
            .all()
        )
    else:
        all_bools = df.dtypes.apply(pd.api.types.is_bool_dtype).all()

    if not all_bools:
        warnings.warn(
            "DataFrames with non-bool types result in worse computational "
            "performance and their support might be discontinued in the future. "
            "Please use a DataFrame with bool type",
            DeprecationWarning,
            stacklevel=3,
        )

        has_nans = pd.isna(df).any().any()
        if null_values and not has_nans:
            warnings.warn(
                "null_values=True is inefficient when there are no NaN values "
                "in the DataFrame. Set null_values=False for faster output.",
                stacklevel=3,
            )
        if not null_values and has_nans:
            raise ValueError(
                "NaN values are not permitted in the DataFrame when null_values=False."
            )

        if hasattr(df, "sparse"):
            values = df.sparse.to_coo().tocoo().data
        else:
            values = df.values

        if null_values:
            idxs = np.where((values != 1) & (values != 0) & (~np.isnan(values)))
        else:
            idxs = np.where((values != 1) & (values != 0))

        if len(idxs[0]) > 0:
            val = values[tuple(loc[0] for loc in idxs)]
            if null_values:
                s = (
                    "The allowed values for a DataFrame "
                    "are True, False, 0, 1, NaN. Found value %s" % (val,)
                )
            else:
                s = (
                    "The allowed values for a DataFrame "
                    "are True, False, 0, 1. Found value %s" % (val,)
                )
            raise ValueError(s)
