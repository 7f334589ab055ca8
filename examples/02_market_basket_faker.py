"""
apriorix — Realistic Market-Basket Analysis with Faker
======================================================

Generates a synthetic e-commerce dataset using Faker (realistic product
names with power-law popularity), mines it level by level and prints the
most frequent product combinations.
"""

import numpy as np
from faker import Faker

from apriorix import Apriori, iter_frequent_levels, sort_transactions


# ── 1. Generate dataset with Faker ──────────────────────────────────────────

def make_baskets(
    n_transactions: int = 20_000,
    n_products: int = 120,
    seed: int = 42,
) -> list[list[str]]:
    """Synthetic baskets: power-law product popularity via Faker names."""
    fake = Faker()
    Faker.seed(seed)
    rng = np.random.default_rng(seed)

    seen: set[str] = set()
    products: list[str] = []
    while len(products) < n_products:
        name = f"{fake.word().capitalize()} {fake.word()}"
        if name not in seen:
            seen.add(name)
            products.append(name)

    # Zipf-like support: top products appear in ~40% of baskets, tail in ~0.5%
    rank = np.arange(1, n_products + 1, dtype=float)
    support = np.clip(0.4 / rank**0.6, 0.005, 0.4)
    matrix = rng.random((n_transactions, n_products)) < support

    return [[products[j] for j in np.flatnonzero(row)] for row in matrix]


print("Generating 20k baskets with Faker…")
baskets = sort_transactions(make_baskets())
print(f"  {len(baskets):,} baskets, {sum(map(len, baskets)) / len(baskets):.1f} items on average\n")


# ── 2. Watch the levels come in ─────────────────────────────────────────────

for size, level in iter_frequent_levels(baskets, support=400, n_shards=4):
    top = sorted(level.items(), key=lambda kv: kv[1], reverse=True)[:5]
    print(f"Level {size}: {len(level):,} frequent itemsets")
    for itemset, count in top:
        print(f"    {count:>6,}  {' + '.join(itemset)}")
print()


# ── 3. The estimator API ────────────────────────────────────────────────────

model = Apriori.from_transactions(baskets, min_support=0.02)
freq = model.mine()
pairs = freq[freq["itemsets"].list.len() >= 2]
print(f"{len(freq):,} itemsets at min_support=0.02, {len(pairs):,} of them with 2+ products")
print(pairs.sort_values("support", ascending=False).head(10).to_string(index=False))
