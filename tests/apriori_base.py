"""Shared helpers and base test classes for the one-hot DataFrame front end."""

from __future__ import annotations

import itertools
import warnings
from collections.abc import Sequence
from typing import Any, Callable

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix

from apriorix import from_transactions

SEED = 42


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def assert_raises(error_type: type, substr: str, func: Callable, *args, **kwargs) -> None:
    """Assert that *func* raises *error_type* with *substr* in its message."""
    try:
        func(*args, **kwargs)
    except error_type as e:
        assert substr in str(e), f"Expected '{substr}' in '{e}'"
    else:
        raise AssertionError(f"Expected {error_type.__name__} to be raised")


def compare_dataframes(df1: pd.DataFrame, df2: pd.DataFrame) -> None:
    assert len(df1) == len(df2), f"Expected {len(df2)} itemsets, got {len(df1)}"
    itemsets1 = [sorted(list(i)) for i in df1["itemsets"]]
    itemsets2 = [sorted(list(i)) for i in df2["itemsets"]]
    rows1 = sorted(zip(itemsets1, df1["support"]))
    rows2 = sorted(zip(itemsets2, df2["support"]))
    for row1, row2 in zip(rows1, rows2):
        if row1[0] != row2[0]:
            raise AssertionError(f"Expected different frequent itemsets\nx:{row1[0]}\ny:{row2[0]}")
        elif not np.isclose(row1[1], row2[1]):
            raise AssertionError(f"Expected different support\nx:{row1[1]}\ny:{row2[1]}")


def brute_force_counts(transactions: Sequence[Sequence[Any]], support: int) -> dict[tuple, int]:
    """Count every subset of every transaction and keep the frequent ones."""
    counts: dict[tuple, int] = {}
    for transaction in transactions:
        items = sorted(set(transaction))
        for k in range(1, len(items) + 1):
            for subset in itertools.combinations(items, k):
                counts[subset] = counts.get(subset, 0) + 1
    return {itemset: n for itemset, n in counts.items() if n >= support}


def make_baskets(
    n_transactions: int = 60,
    n_products: int = 12,
    max_basket: int = 7,
    seed: int = SEED,
) -> list[list[str]]:
    """Sorted baskets of Faker product names with Zipf-like popularity."""
    from faker import Faker

    fake = Faker()
    Faker.seed(seed)
    rng = np.random.default_rng(seed)

    products: list[str] = []
    while len(products) < n_products:
        name = f"{fake.word().capitalize()} {fake.color_name()}"
        if name not in products:
            products.append(name)

    weights = 1.0 / np.arange(1, n_products + 1) ** 0.8
    weights /= weights.sum()
    baskets = []
    for _ in range(n_transactions):
        size = int(rng.integers(1, max_basket + 1))
        picked = rng.choice(products, size=size, replace=False, p=weights)
        baskets.append(sorted(str(p) for p in picked))
    return baskets


# ---------------------------------------------------------------------------
# Edge case tests
# ---------------------------------------------------------------------------


class AprioriTestEdgeCases:
    def setUp(self, algo: Callable) -> None:
        self.algo = algo

    def test_all_ones(self) -> None:
        df = pd.DataFrame([[1, 1], [1, 1], [1, 1]], columns=["A", "B"]).astype(bool)
        res = self.algo(df, min_support=1.0)
        assert res.shape[0] == 3

    def test_min_support_too_high(self) -> None:
        df = pd.DataFrame([[1, 0], [0, 1]], columns=["A", "B"]).astype(bool)
        res = self.algo(df, min_support=1.0)
        assert res.shape[0] == 0
        assert list(res.columns) == ["support", "itemsets"]

    def test_no_rows(self) -> None:
        df = pd.DataFrame({"A": pd.Series([], dtype=bool), "B": pd.Series([], dtype=bool)})
        res = self.algo(df, min_support=0.5)
        assert res.shape == (0, 2)


# ---------------------------------------------------------------------------
# Error tests
# ---------------------------------------------------------------------------


class AprioriTestErrors:
    def setUp(self, algo: Callable) -> None:
        self.one_ary = np.array(
            [
                [0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 1],
                [0, 0, 1, 1, 0, 1, 0, 1, 1, 0, 1],
                [1, 0, 0, 1, 0, 1, 1, 0, 0, 0, 0],
                [0, 1, 0, 0, 0, 1, 1, 0, 0, 1, 1],
                [0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 0],
            ]
        )
        self.cols = [
            "Apple",
            "Corn",
            "Dill",
            "Eggs",
            "Ice cream",
            "Kidney Beans",
            "Milk",
            "Nutmeg",
            "Onion",
            "Unicorn",
            "Yogurt",
        ]
        self.algo = algo

    def test_wrong_values_errors(self) -> None:
        def test_with_dataframe(df: pd.DataFrame) -> None:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", DeprecationWarning)
                assert_raises(
                    ValueError,
                    "The allowed values for a DataFrame are True, False, 0, 1. Found value 2",
                    self.algo,
                    df,
                )

        df2 = pd.DataFrame(self.one_ary, columns=self.cols).copy()
        df2.iloc[3, 3] = 2
        test_with_dataframe(df2)

        sdf = df2.astype(pd.SparseDtype("int", fill_value=0))
        test_with_dataframe(sdf)

    def test_nan_values_rejected(self) -> None:
        df = pd.DataFrame(self.one_ary, columns=self.cols).astype(float)
        df.iloc[0, 0] = np.nan
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            assert_raises(ValueError, "NaN values are not permitted", self.algo, df)

    def test_non_bool_warns(self) -> None:
        df = pd.DataFrame(self.one_ary, columns=self.cols)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.algo(df)
        assert any(issubclass(w.category, DeprecationWarning) for w in caught)

    def test_min_support_zero(self) -> None:
        df = pd.DataFrame(self.one_ary, columns=self.cols).astype(bool)
        assert_raises(
            ValueError,
            "`min_support` must be a positive number within the interval `(0, 1]`. Got 0.0.",
            self.algo,
            df,
            min_support=0.0,
        )

    def test_max_len_zero(self) -> None:
        df = pd.DataFrame(self.one_ary, columns=self.cols).astype(bool)
        assert_raises(ValueError, "`max_len` must be a positive integer", self.algo, df, max_len=0)


# ---------------------------------------------------------------------------
# Example 1: grocery-style 5×11 dataset
# ---------------------------------------------------------------------------


class AprioriTestEx1:
    def setUp(self, algo: Callable, one_ary: np.ndarray | None = None) -> None:
        if one_ary is None:
            self.one_ary = np.array(
                [
                    [0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 1],
                    [0, 0, 1, 1, 0, 1, 0, 1, 1, 0, 1],
                    [1, 0, 0, 1, 0, 1, 1, 0, 0, 0, 0],
                    [0, 1, 0, 0, 0, 1, 1, 0, 0, 1, 1],
                    [0, 1, 0, 1, 1, 1, 0, 0, 1, 0, 0],
                ]
            )
        else:
            self.one_ary = one_ary

        self.cols = [
            "Apple",
            "Corn",
            "Dill",
            "Eggs",
            "Ice cream",
            "Kidney Beans",
            "Milk",
            "Nutmeg",
            "Onion",
            "Unicorn",
            "Yogurt",
        ]
        self.df = pd.DataFrame(self.one_ary, columns=self.cols).astype(bool)
        self.algo = algo

    def test_default(self) -> None:
        res_df = self.algo(self.df)
        expect = pd.DataFrame(
            [
                [0.8, np.array([3])],
                [1.0, np.array([5])],
                [0.6, np.array([6])],
                [0.6, np.array([8])],
                [0.6, np.array([10])],
                [0.8, np.array([3, 5])],
                [0.6, np.array([3, 8])],
                [0.6, np.array([5, 6])],
                [0.6, np.array([5, 8])],
                [0.6, np.array([5, 10])],
                [0.6, np.array([3, 5, 8])],
            ],
            columns=["support", "itemsets"],
        )
        compare_dataframes(res_df, expect)

    def test_colnames_selection(self) -> None:
        res_df = self.algo(self.df, use_colnames=True)
        assert res_df.values.shape == self.algo(self.df).values.shape

        def has_items(row_items, expected):
            return set(row_items) == set(expected)

        assert res_df[res_df["itemsets"].apply(lambda x: has_items(x, ["nothing"]))].values.shape == (0, 2)
        assert res_df[
            res_df["itemsets"].apply(lambda x: has_items(x, ["Eggs", "Kidney Beans", "Onion"]))
        ].values.shape == (1, 2)

    def test_numpy_input(self) -> None:
        res_df = self.algo(self.one_ary.astype(bool))
        compare_dataframes(res_df, self.algo(self.df))

    def test_sparse(self) -> None:
        def test_with_fill_values(fill_value: object) -> None:
            sdt = pd.SparseDtype(type(fill_value), fill_value=fill_value)
            sdf = self.df.astype(sdt)
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", DeprecationWarning)
                res_df = self.algo(sdf, use_colnames=True)
                assert res_df.values.shape == self.algo(self.df).values.shape
            assert res_df[
                res_df["itemsets"].apply(lambda x: set(x) == {"Milk", "Kidney Beans"})
            ].values.shape == (1, 2)

        test_with_fill_values(0)
        test_with_fill_values(False)

    def test_sparse_with_zero(self) -> None:
        res_df = self.algo(self.df)
        ary2 = self.one_ary.copy()
        ary2[3, :] = 1
        sparse_ary = csr_matrix(ary2)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            sparse_ary[3, :] = self.one_ary[3, :]
        sdf = pd.DataFrame.sparse.from_spmatrix(sparse_ary, columns=self.df.columns)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            res_df2 = self.algo(sdf)
        compare_dataframes(res_df2, res_df)

    def test_max_len(self) -> None:
        res_df1 = self.algo(self.df)
        max_len = np.max(res_df1["itemsets"].apply(len))
        assert max_len == 3

        res_df2 = self.algo(self.df, max_len=2)
        max_len = np.max(res_df2["itemsets"].apply(len))
        assert max_len == 2

    def test_num_itemsets_attr(self) -> None:
        res_df = self.algo(self.df)
        assert res_df.attrs["num_itemsets"] == 5


# ---------------------------------------------------------------------------
# Example 2: single-item transactions (one pair)
# ---------------------------------------------------------------------------


class AprioriTestEx2:
    def setUp(self, algo: Callable) -> None:
        database = [["a"], ["b"], ["c", "d"], ["e"]]
        self.df = from_transactions(database)
        self.algo = algo

    def test_output(self) -> None:
        res_df = self.algo(self.df, min_support=0.001, use_colnames=True)
        expect = pd.DataFrame(
            [
                [0.25, frozenset(["a"])],
                [0.25, frozenset(["b"])],
                [0.25, frozenset(["c"])],
                [0.25, frozenset(["d"])],
                [0.25, frozenset(["e"])],
                [0.25, frozenset(["c", "d"])],
            ],
            columns=["support", "itemsets"],
        )
        compare_dataframes(res_df, expect)
