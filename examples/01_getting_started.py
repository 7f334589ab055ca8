"""
apriorix — Getting Started
==========================

The simplest possible example: mine frequent itemsets from a one-hot
encoded pandas DataFrame, then from plain transactions.
"""

import pandas as pd

from apriorix import apriori, mine_frequent_itemsets, sort_transactions, to_transactions

# A small market-basket dataset (5 transactions, 5 items)
data = {
    "bread": [1, 1, 0, 1, 1],
    "butter": [1, 0, 1, 1, 0],
    "milk": [1, 1, 1, 0, 1],
    "eggs": [0, 1, 1, 0, 1],
    "cheese": [0, 0, 1, 0, 0],
}
df = pd.DataFrame(data).astype(bool)

print("Input DataFrame:")
print(df.to_string())
print()

# ── 1. Relative support on a one-hot DataFrame ──────────────────────────────
freq = apriori(df, min_support=0.4, use_colnames=True)

print("Frequent itemsets (min_support=0.4):")
print(freq.sort_values("support", ascending=False).to_string(index=False))
print()

# ── 2. Absolute support on plain transactions ───────────────────────────────
transactions = to_transactions(df)
table = mine_frequent_itemsets(transactions, 2)

print("Frequent itemsets (support >= 2 transactions):")
for itemset, count in sorted(table.items(), key=lambda kv: (len(kv[0]), kv[0])):
    print(f"  {', '.join(itemset):<25} {count}")
print()

# ── 3. Raw baskets need sorting first ───────────────────────────────────────
raw = [["milk", "bread", "milk"], ["eggs", "bread"], ["bread", "eggs", "milk"]]
print(mine_frequent_itemsets(sort_transactions(raw), 2))
