from .permutation import (
    as_genome,
    crossover_window,
    distinct_pair,
    multiset_difference,
    random_permutations,
    segment_crossover,
    swap_mutation,
)

__all__ = [
    "as_genome",
    "crossover_window",
    "distinct_pair",
    "multiset_difference",
    "random_permutations",
    "segment_crossover",
    "swap_mutation",
]
