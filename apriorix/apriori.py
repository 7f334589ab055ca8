"""Level-wise Apriori search for frequent itemsets.

Mining starts from the frequent single items and alternates between
candidate generation (:func:`apriorix.candidates.apriori_gen`) and support
counting (:mod:`apriorix.counting`) until a level produces no candidates.

Three entry points share that loop:

- :func:`mine_frequent_itemsets` works on plain sorted transactions and an
  absolute support count.
- :func:`apriori` works on one-hot DataFrames / arrays and a relative
  ``min_support``, returning a ``support / itemsets`` DataFrame.
- :class:`Apriori` is the estimator form of :func:`apriori`.
"""

from __future__ import annotations

import itertools
import logging
import math
import time
import typing
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any

from ._compat import to_dataframe
from ._validation import (
    valid_input_check,
    valid_max_len_check,
    valid_min_support_check,
    valid_support_check,
    valid_transactions_check,
)
from .candidates import apriori_gen
from .counting import FrequencyTable, count_candidates, count_items
from .model import Miner
from .transactions import _one_hot_rows

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl

    from .typing import Transaction

logger = logging.getLogger(__name__)


def iter_frequent_levels(
    transactions: Sequence[Transaction],
    support: int,
    max_len: int | None = None,
    n_shards: int = 1,
) -> Iterator[tuple[int, FrequencyTable]]:
    """Yield ``(k, frequent k-itemsets)`` for every non-empty level.

    The input is validated when iteration starts.  See
    :func:`mine_frequent_itemsets` for the parameters.
    """
    valid_support_check(support)
    valid_max_len_check(max_len)
    transactions = list(transactions)
    valid_transactions_check(transactions)
    transactions = [tuple(transaction) for transaction in transactions]

    size = 1
    frequent = count_items(transactions, support)
    while frequent:
        yield size, frequent
        if max_len is not None and size >= max_len:
            return

        size += 1
        # the join step needs the previous level in lexicographic order
        candidates = apriori_gen(sorted(frequent))
        if not candidates:
            logger.debug("Level %d: no candidates, stopping", size)
            return
        frequent = count_candidates(transactions, candidates, size, support, n_shards=n_shards)


def mine_frequent_itemsets(
    transactions: Sequence[Transaction],
    support: int,
    max_len: int | None = None,
    n_shards: int = 1,
    verbose: int = 0,
) -> FrequencyTable:
    """Find every itemset contained in at least *support* transactions.

    Parameters
    ----------
    transactions : Sequence[Sequence]
        The transactions.  Items of a transaction must be distinct and
        sorted ascending; :func:`apriorix.sort_transactions` prepares
        arbitrary input.
    support : int
        Minimum number of transactions an itemset must occur in.
    max_len : int | None, default=None
        Maximum length of the itemsets.  ``None`` means no limit.
    n_shards : int, default=1
        Number of transaction shards counted separately per level.
    verbose : int, default=0
        If > 0, print progress details to standard output.

    Returns
    -------
    FrequencyTable
        Mapping of ascending item tuples to their transaction counts.

    Raises
    ------
    TypeError
        If *support* is not an integer or items cannot be compared.
    ValueError
        If *support* < 1, *max_len* < 1, or a transaction is unsorted or
        repeats an item.

    Examples
    --------
    >>> table = mine_frequent_itemsets([[1, 2, 3, 4], [1, 2, 4], [1, 2], [2, 3, 4]], 2)
    >>> table[(2, 3, 4)]
    2
    """
    t0 = time.perf_counter()
    result = FrequencyTable()
    for size, frequent in iter_frequent_levels(transactions, support, max_len=max_len, n_shards=n_shards):
        if verbose:
            print(f"[{time.strftime('%X')}] Level {size}: {len(frequent):,} frequent itemsets.")
        for itemset, n in frequent.items():
            result.add(itemset, n)

    logger.debug("Found %d frequent itemsets in %.3fs", len(result), time.perf_counter() - t0)
    if verbose:
        print(f"[{time.strftime('%X')}] Apriori completed in {time.perf_counter() - t0:.2f}s.")
    return result


def apriori(
    df: pd.DataFrame | pl.DataFrame | np.ndarray | Any,
    min_support: float = 0.5,
    null_values: bool = False,
    use_colnames: bool = False,
    max_len: int | None = None,
    verbose: int = 0,
    column_names: list[Any] | None = None,
) -> pd.DataFrame:
    """Find frequent itemsets in a one-hot encoded dataset.

    Parameters
    ----------
    df : pandas.DataFrame, polars.DataFrame, pyarrow.Table or numpy.ndarray
        One row per transaction, one bool / 0-1 column per item.
    min_support : float, default=0.5
        The minimum support in ``(0, 1]``, as a fraction of the transactions.
    null_values : bool, default=False
        If True, allow NaN in pandas DataFrames (treated as absent).
    use_colnames : bool, default=False
        If True, itemsets hold column names instead of column indices.
    max_len : int | None, default=None
        Maximum length of the itemsets generated. If None, no limit is applied.
    verbose : int, default=0
        If > 0, print progress details to standard output.
    column_names : list | None, default=None
        Item names for NumPy input when ``use_colnames=True``.

    Returns
    -------
    pandas.DataFrame
        DataFrame with two columns:
        - `support`: the fraction of transactions containing the itemset.
        - `itemsets`: list of items (indices or column names).
    """
    valid_min_support_check(min_support)
    valid_max_len_check(max_len)

    df = to_dataframe(df)
    n_rows, n_cols = df.shape

    if type(df).__name__ == "ndarray":
        col_names = column_names if column_names is not None else list(range(n_cols))
    else:
        df_pd = typing.cast("pd.DataFrame", df)
        valid_input_check(df_pd, null_values)
        col_names = list(df_pd.columns)

    if n_rows == 0:
        return _build_result(FrequencyTable(), n_rows, col_names, use_colnames)

    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Extracting transactions from {n_rows:,} x {n_cols:,} matrix...")
        t0 = time.perf_counter()
    rows = _one_hot_rows(df)
    if verbose:
        print(f"[{time.strftime('%X')}] Done in {time.perf_counter() - t0:.2f}s. Mining...")

    # rounding guards against 0.7 * 10 == 7.000000000000001
    min_count = max(1, math.ceil(round(min_support * n_rows, 9)))
    table = mine_frequent_itemsets(rows, min_count, max_len=max_len, verbose=verbose)

    if verbose:
        print(f"[{time.strftime('%X')}] Assembling result DataFrame...")
    return _build_result(table, n_rows, col_names, use_colnames)


def _build_result(
    table: FrequencyTable,
    n_rows: int,
    col_names: list[Any],
    use_colnames: bool,
) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    import pyarrow as pa

    if len(table) == 0:
        result = pd.DataFrame(columns=["support", "itemsets"])  # type: ignore[arg-type]
        result.attrs["num_itemsets"] = n_rows
        return result

    supports = np.fromiter(table.values(), dtype=np.float64, count=len(table)) / n_rows
    offsets = np.zeros(len(table) + 1, dtype=np.int32)
    offsets[1:] = np.cumsum([len(itemset) for itemset in table])
    items_pa = pa.array(np.fromiter(itertools.chain.from_iterable(table), dtype=np.int32), type=pa.int32())

    if use_colnames:
        items_pa = pa.array(col_names).take(items_pa)

    list_arr = pa.ListArray.from_arrays(pa.array(offsets, type=pa.int32()), items_pa)
    result = pd.DataFrame(
        {
            "support": supports,
            "itemsets": pd.Series(pd.arrays.ArrowExtensionArray(list_arr)),
        }
    )
    result.attrs["num_itemsets"] = n_rows
    return result


class Apriori(Miner):
    """Apriori frequent itemset miner.

    Generates candidates level by level and prunes every candidate with an
    infrequent subset before counting it.  Suited to sparse baskets where
    the frequent itemsets stay short.
    """

    def __init__(
        self,
        data: pd.DataFrame | pl.DataFrame | np.ndarray | Any,
        item_names: list[Any] | None = None,
        min_support: float = 0.5,
        null_values: bool = False,
        use_colnames: bool = True,
        max_len: int | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ):
        """Initialize the Apriori miner.

        Parameters
        ----------
        data : pandas.DataFrame, polars.DataFrame, pyarrow.Table or numpy.ndarray
            The one-hot encoded transactions.
        item_names : list | None, default=None
            Item names to use for a NumPy input when `use_colnames=True`.
        min_support : float, default=0.5
            The minimum support threshold `(0.0, 1.0]`, as a fraction of the transactions.
        null_values : bool, default=False
            If True, allow NaN values in pandas DataFrames.
        use_colnames : bool, default=True
            If True, returns itemsets containing the item names
            rather than their column indices.
        max_len : int | None, default=None
            Maximum length of the itemsets generated. If None, no limit is applied.
        verbose : int, default=0
            If > 0, print progress details to standard output.
        """
        super().__init__(data=data, item_names=item_names, **kwargs)
        self.min_support = min_support
        self.null_values = null_values
        self.use_colnames = use_colnames
        self.max_len = max_len
        self.verbose = verbose

    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Run Apriori on the stored data.

        Keyword arguments override the parameters given to the constructor.

        Returns
        -------
        pandas.DataFrame
            DataFrame with `support` and `itemsets` columns, converted back
            to the input's DataFrame type.
        """
        result_df = apriori(
            self.data,
            min_support=kwargs.get("min_support", self.min_support),
            null_values=kwargs.get("null_values", self.null_values),
            use_colnames=kwargs.get("use_colnames", self.use_colnames),
            max_len=kwargs.get("max_len", self.max_len),
            verbose=kwargs.get("verbose", self.verbose),
            column_names=self.item_names,
        )
        return self._convert_to_orig_type(result_df)
