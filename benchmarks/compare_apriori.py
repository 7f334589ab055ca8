import argparse
import math
import random
import time

from apriorix import apriori, from_transactions, mine_frequent_itemsets, sort_transactions


def generate_data(n_transactions=1000, avg_items=5, n_unique_items=100):
    """Generates synthetic market basket data."""
    dataset = []
    items = [f"item_{i}" for i in range(n_unique_items)]
    for _ in range(n_transactions):
        n_items = max(1, int(random.gauss(avg_items, 1)))
        transaction = random.sample(items, min(n_items, n_unique_items))
        dataset.append(transaction)
    return dataset


def benchmark_plain(dataset, min_support, n_shards):
    start_sort = time.perf_counter()
    transactions = sort_transactions(dataset)
    end_sort = time.perf_counter()

    support = max(1, math.ceil(round(min_support * len(transactions), 9)))
    start_mine = time.perf_counter()
    table = mine_frequent_itemsets(transactions, support, n_shards=n_shards)
    end_mine = time.perf_counter()

    return {
        "prep_time": end_sort - start_sort,
        "mine_time": end_mine - start_mine,
        "n_itemsets": len(table),
    }


def benchmark_dataframe(dataset, min_support):
    start_trans = time.perf_counter()
    df = from_transactions(dataset)
    end_trans = time.perf_counter()

    start_mine = time.perf_counter()
    freq = apriori(df, min_support=min_support, use_colnames=True)
    end_mine = time.perf_counter()

    return {
        "prep_time": end_trans - start_trans,
        "mine_time": end_mine - start_mine,
        "n_itemsets": len(freq),
    }


def run_benchmarks():
    parser = argparse.ArgumentParser(description="Benchmark the apriorix entry points")
    parser.add_argument("--transactions", type=int, default=5000)
    parser.add_argument("--items", type=int, default=10)
    parser.add_argument("--unique", type=int, default=200)
    parser.add_argument("--support", type=float, default=0.01)
    parser.add_argument("--shards", type=int, default=4)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    random.seed(args.seed)
    print(f"Generating data: {args.transactions} transactions, {args.items} avg items, {args.unique} unique items...")
    dataset = generate_data(args.transactions, args.items, args.unique)

    print(f"\nBenchmarks (min_support={args.support}):")
    results = [
        ("plain, 1 shard", benchmark_plain(dataset, args.support, 1)),
        (f"plain, {args.shards} shards", benchmark_plain(dataset, args.support, args.shards)),
        ("one-hot DataFrame", benchmark_dataframe(dataset, args.support)),
    ]
    print(f"{'variant':<22}{'prep (s)':>10}{'mine (s)':>10}{'itemsets':>10}")
    for name, res in results:
        print(f"{name:<22}{res['prep_time']:>10.3f}{res['mine_time']:>10.3f}{res['n_itemsets']:>10,}")


if __name__ == "__main__":
    run_benchmarks()
