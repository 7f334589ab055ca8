from __future__ import annotations

import time
import typing
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind, to_dataframe

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd

    from ._compat import DataFrame


def from_transactions(
    data: DataFrame | Sequence[Sequence[Any]] | Any,
    transaction_col: str | None = None,
    item_col: str | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> Any:
    """Convert transactional data to a one-hot boolean matrix.

    The return type mirrors the input type:

    - **Polars** ``DataFrame`` → **Polars** ``DataFrame``
    - **Pandas** ``DataFrame`` → **Pandas** ``DataFrame``
    - ``list[list[...]]``      → **Pandas** ``DataFrame``

    Parameters
    ----------
    data
        One of:

        - **Pandas / Polars DataFrame** in long format with (at least) two
          columns: one for the transaction identifier and one for the item.
        - **List of lists** where each inner list contains the items of a
          single transaction, e.g. ``[["bread", "milk"], ["bread", "eggs"]]``.

    transaction_col
        Name of the column that identifies transactions.  If ``None`` the
        first column is used.  Ignored for list-of-lists input.

    item_col
        Name of the column that contains item values.  If ``None`` the
        second column is used.  Ignored for list-of-lists input.

    min_item_count
        Minimum number of transactions an item must appear in to get a
        column. Default is 1.

    verbose
        Print progress details when > 0.

    Returns
    -------
    DataFrame
        A sparse boolean DataFrame ready for :func:`apriorix.apriori`.
        Columns are the unique items in ascending order.

    Examples
    --------
    >>> import apriorix
    >>> ohe = apriorix.from_transactions([["bread", "milk"], ["bread", "eggs"]])
    >>> list(ohe.columns)
    ['bread', 'eggs', 'milk']
    """
    if isinstance(data, (list, tuple)):
        return _from_list(data, min_item_count=min_item_count, verbose=verbose)

    kind = frame_kind(data)
    if kind not in ("pandas", "polars"):
        raise TypeError(f"Expected a Pandas/Polars DataFrame or list of lists, got {type(data)}")

    pandas_df = typing.cast("pd.DataFrame", to_dataframe(data))
    result_pd = _from_dataframe(pandas_df, transaction_col, item_col, min_item_count=min_item_count, verbose=verbose)

    if kind == "polars":
        from ._dependencies import import_optional_dependency

        pl = import_optional_dependency("polars")
        result_pd = result_pd.sparse.to_dense() if hasattr(result_pd, "sparse") else result_pd
        result_pd.columns = [str(c) for c in result_pd.columns]
        return pl.from_pandas(result_pd.astype(bool))  # type: ignore[union-attr]
    return result_pd


def to_transactions(df: DataFrame | Any) -> list[list[Any]]:
    """Convert a one-hot matrix back to one ascending item list per row.

    Items are the column labels, so the output is the input format of
    :func:`apriorix.mine_frequent_itemsets`.  A NumPy array yields column
    indices.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"a": [True, False], "b": [True, True]})
    >>> to_transactions(df)
    [['a', 'b'], ['b']]
    """
    df = to_dataframe(df)
    labels = list(df.columns) if hasattr(df, "columns") else None
    rows = _one_hot_rows(df)
    if labels is None:
        return [list(row) for row in rows]
    return sort_transactions([labels[i] for i in row] for row in rows)


def sort_transactions(transactions: Iterable[Iterable[Any]]) -> list[list[Any]]:
    """Drop repeated items and sort every transaction ascending.

    The result satisfies the precondition of
    :func:`apriorix.mine_frequent_itemsets`.
    """
    return [sorted(set(transaction)) for transaction in transactions]


def _one_hot_rows(df: pd.DataFrame | np.ndarray) -> list[list[int]]:
    """Ascending indices of the set columns of every row."""
    import numpy as np

    if hasattr(df, "sparse"):
        csr = df.sparse.to_coo().tocsr()
        csr.eliminate_zeros()
        csr.sort_indices()
        return [csr.indices[csr.indptr[i] : csr.indptr[i + 1]].tolist() for i in range(csr.shape[0])]

    values = df.to_numpy() if hasattr(df, "to_numpy") else np.asarray(df)
    # NaN counts as "not present" when null values are allowed
    dense = np.nan_to_num(values.astype(float), nan=0.0) != 0
    return [np.flatnonzero(row).tolist() for row in dense]


def _from_list(
    transactions: Sequence[Sequence[Any]],
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    from scipy import sparse as sp

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Extracting unique items from list of lists...")
        t0 = time.perf_counter()

    counts: dict[Any, int] = {}
    for txn in transactions:
        for item in set(txn):
            counts[item] = counts.get(item, 0) + 1
    all_items = sorted(item for item, count in counts.items() if count >= min_item_count)
    item_to_idx = {item: i for i, item in enumerate(all_items)}

    row_idx: list[int] = []
    col_idx: list[int] = []
    for i, txn in enumerate(transactions):
        for item in set(txn):
            if item in item_to_idx:
                row_idx.append(i)
                col_idx.append(item_to_idx[item])

    if verbose:
        print(f"[{time.strftime('%X')}] Found {len(all_items):,} unique items. Building CSR matrix...")

    data = np.ones(len(row_idx), dtype=bool)
    csr = sp.csr_matrix(
        (data, (np.array(row_idx, dtype=np.int64), np.array(col_idx, dtype=np.int64))),
        shape=(len(transactions), len(all_items)),
    )
    res = pd.DataFrame.sparse.from_spmatrix(csr, columns=all_items).astype(pd.SparseDtype("bool", fill_value=False))

    if verbose:
        print(f"[{time.strftime('%X')}] One-hot encoding completed in {time.perf_counter() - t0:.2f}s.")
    return res


def _from_dataframe(
    df: pd.DataFrame,
    transaction_col: str | None,
    item_col: str | None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    from scipy import sparse as sp

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Encoding long-format DataFrame (shape={df.shape})...")
        t0 = time.perf_counter()

    cols = list(df.columns)
    if len(cols) < 2:
        raise ValueError(f"DataFrame must have at least 2 columns (transaction id + item), got {len(cols)}: {cols}")

    txn_col = transaction_col or cols[0]
    itm_col = item_col or cols[1]
    if txn_col not in df.columns:
        raise ValueError(f"Transaction column '{txn_col}' not found. Available columns: {cols}")
    if itm_col not in df.columns:
        raise ValueError(f"Item column '{itm_col}' not found. Available columns: {cols}")

    df = df[[txn_col, itm_col]].drop_duplicates()
    if min_item_count > 1:
        counts = df[itm_col].value_counts()
        df = df.loc[df[itm_col].isin(counts[counts >= min_item_count].index)]

    txn_codes, txn_uniques = pd.factorize(df[txn_col], sort=False)
    item_codes, item_uniques = pd.factorize(df[itm_col], sort=True)

    data = np.ones(len(txn_codes), dtype=bool)
    csr = sp.csr_matrix(
        (data, (txn_codes.astype(np.int64), item_codes.astype(np.int64))),
        shape=(len(txn_uniques), len(item_uniques)),
    )
    res = pd.DataFrame.sparse.from_spmatrix(csr, columns=list(item_uniques)).astype(
        pd.SparseDtype("bool", fill_value=False)
    )

    if verbose:
        print(f"[{time.strftime('%X')}] Encoding completed in {time.perf_counter() - t0:.2f}s.")
    return res
