from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._compat import frame_kind

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    from typing_extensions import Self


class Miner(ABC):
    """Base class for frequent itemset miners.

    Holds the one-hot input, remembers which DataFrame library it came from
    so results can be handed back in the same type, and provides the
    ``fit`` / ``predict`` aliases around :meth:`mine`.
    """

    def __init__(self, data: pd.DataFrame | Any, item_names: list[Any] | None = None, **kwargs: Any):
        """Initialize the miner with one-hot data.

        Parameters
        ----------
        data : pd.DataFrame | Any
            A one-hot encoded dataset (pandas, Polars, PyArrow or NumPy).
        item_names : list, optional
            Column names if data is a raw NumPy array.
            If not provided, and data is a DataFrame, columns are inferred.
        **kwargs
            Algorithm-specific mining parameters (min_support, max_len, etc.).
        """
        kind = frame_kind(data)
        if item_names is None:
            if kind == "pyarrow":
                item_names = list(data.column_names)
            elif hasattr(data, "columns"):
                item_names = list(data.columns)

        self.data = data
        self.item_names = item_names
        self.kwargs = kwargs
        self._result: pd.DataFrame | None = None
        self._num_itemsets = int(data.shape[0]) if hasattr(data, "shape") else len(data)
        self._orig_df_type: str = kind if kind in ("polars", "pyarrow") else "pandas"

    def __dir__(self) -> list[str]:
        return [k for k in super().__dir__() if not k.startswith("_")]

    def __repr__(self) -> str:
        fitted = self._result is not None
        return f"{type(self).__name__}(n_transactions={self._num_itemsets}, fitted={fitted})"

    def _convert_to_orig_type(self, df: pd.DataFrame) -> Any:
        """Convert a pandas result back to the DataFrame type the data came in."""
        if self._orig_df_type == "pandas":
            return df

        # Arrow-backed list columns become plain lists for the other libraries
        df = df.copy()
        df["itemsets"] = df["itemsets"].apply(list)
        if self._orig_df_type == "pyarrow":
            import pyarrow as pa

            return pa.Table.from_pandas(df, preserve_index=False)

        from ._dependencies import import_optional_dependency

        pl = import_optional_dependency("polars")
        return pl.from_pandas(df)  # type: ignore[union-attr]

    @classmethod
    def from_transactions(
        cls,
        data: pd.DataFrame | pl.DataFrame | Sequence[Sequence[Any]] | Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Load transactional data into the miner.

        Parameters
        ----------
        data
            One of:

            - **Pandas / Polars DataFrame** with (at least) two columns:
              one for the transaction identifier and one for the item.
            - **List of lists** where each inner list contains the items of a
              single transaction, e.g. ``[["bread", "milk"], ["bread", "eggs"]]``.
        transaction_col
            Name of the column that identifies transactions. If ``None`` the
            first column is used. Ignored for list-of-lists input.
        item_col
            Name of the column that contains item values. If ``None`` the
            second column is used. Ignored for list-of-lists input.
        verbose : int, default=0
            Whether to print progress details.
        **kwargs
            Algorithm-specific parameters saved into the Miner (e.g., ``min_support``).

        Returns
        -------
        Miner
            Configured miner instance, ready to call ``.mine()``.
        """
        from .transactions import from_transactions

        kind = frame_kind(data)
        one_hot = from_transactions(data, transaction_col=transaction_col, item_col=item_col, verbose=verbose)
        if kind == "polars":
            one_hot = one_hot.to_pandas()

        miner = cls(one_hot, **kwargs)
        miner._orig_df_type = "polars" if kind == "polars" else "pandas"
        return miner

    @classmethod
    def from_pandas(
        cls,
        df: pd.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_polars(
        cls,
        df: pl.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @abstractmethod
    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Execute the mining algorithm and return the frequent itemsets.

        Must be implemented by subclasses.
        """

    def fit(self, **kwargs: Any) -> Self:
        """Sklearn-compatible alias for ``mine()``. Runs the mining algorithm.

        Returns
        -------
        self
        """
        self._result = self.mine(**kwargs)
        return self

    def predict(self, **kwargs: Any) -> pd.DataFrame:
        """Return the last mined result, or run ``fit()`` first.

        Returns
        -------
        pd.DataFrame
            The frequent itemsets.
        """
        if self._result is None:
            self.fit(**kwargs)
        return self._result  # type: ignore[return-value]
