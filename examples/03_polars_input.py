"""
apriorix — Polars DataFrame Input
=================================

apriorix accepts Polars DataFrames directly; the estimator API hands the
result back as a Polars DataFrame.

Requires: `pip install "apriorix[polars]"`
"""

import numpy as np
import polars as pl

from apriorix import Apriori, apriori, from_transactions

# ── 1. Create a Polars DataFrame ────────────────────────────────────────────

rng = np.random.default_rng(0)
n_rows, n_cols = 5_000, 40
products = [f"product_{i:03d}" for i in range(n_cols)]

# Power-law popularity
support = np.clip(0.5 / np.arange(1, n_cols + 1, dtype=float) ** 0.5, 0.01, 0.5)
matrix = rng.random((n_rows, n_cols)) < support

df_pl = pl.DataFrame({p: matrix[:, i].tolist() for i, p in enumerate(products)})
print(f"Polars DataFrame: {df_pl.shape[0]:,} rows × {df_pl.shape[1]} columns\n")

# ── 2. apriori on Polars — same API as pandas ───────────────────────────────

freq = apriori(df_pl, min_support=0.1, use_colnames=True)
print(f"Frequent itemsets: {len(freq):,}")
print(freq.sort_values("support", ascending=False).head(8).to_string(index=False))
print()

# ── 3. Long-format orders → one-hot → Polars result ─────────────────────────

orders = pl.DataFrame(
    {
        "order_id": [1, 1, 1, 2, 2, 3, 3, 4],
        "item": ["tea", "milk", "sugar", "tea", "milk", "tea", "sugar", "milk"],
    }
)
ohe = from_transactions(orders, transaction_col="order_id", item_col="item")
result = Apriori(ohe, min_support=0.5).mine()
print(type(result).__name__)
print(result)
