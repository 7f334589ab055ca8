from .apriori import Apriori, apriori, iter_frequent_levels, mine_frequent_itemsets
from .candidates import apriori_gen, has_infrequent_subset
from .combinations import combinations
from .counting import FrequencyTable, count_candidates, count_items
from .model import Miner
from .transactions import from_transactions, sort_transactions, to_transactions

__all__ = [
    "mine_frequent_itemsets",
    "iter_frequent_levels",
    "apriori",
    "Apriori",
    "Miner",
    "apriori_gen",
    "has_infrequent_subset",
    "combinations",
    "FrequencyTable",
    "count_items",
    "count_candidates",
    "from_transactions",
    "to_transactions",
    "sort_transactions",
]
