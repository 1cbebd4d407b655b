from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

from sortga.foundation.exceptions import InvalidConfigurationError, InvalidInputError

GenomeArray: TypeAlias = NDArray[np.integer[Any]]
RNG: TypeAlias = np.random.Generator


def as_genome(values: Sequence[int] | GenomeArray) -> GenomeArray:
    """Return an owned 1-D int64 copy of ``values``."""
    genome = np.array(values, dtype=np.int64, copy=True)
    if genome.ndim != 1:
        raise InvalidInputError("Genomes must be one-dimensional sequences of integers.", value=genome.shape)
    return genome


def random_permutations(
    base: Sequence[int] | GenomeArray,
    count: int,
    rng: RNG,
) -> list[GenomeArray]:
    """Draw ``count`` independent uniform shuffles of ``base``."""
    if count < 0:
        raise InvalidConfigurationError("count", count, "a non-negative integer")
    genes = as_genome(base)
    return [rng.permutation(genes) for _ in range(count)]


def crossover_window(length: int, rng: RNG) -> tuple[int, int]:
    """
    Draw an inclusive crossover window.

    ``start`` is uniform on ``[0, length - 1]`` and ``end`` is uniform on
    ``[start, length - 1]``, so single-gene windows are possible.
    """
    if length <= 0:
        return 0, -1
    start = int(rng.integers(0, length))
    end = int(rng.integers(start, length))
    return start, end


def multiset_difference(source: GenomeArray, removed: GenomeArray) -> GenomeArray:
    """
    Remove one occurrence of ``source`` per occurrence in ``removed``.

    Surviving genes keep their relative order in ``source``.
    """
    pending = Counter(int(v) for v in removed)
    keep = np.ones(source.size, dtype=bool)
    for idx, value in enumerate(source.tolist()):
        if pending[value] > 0:
            pending[value] -= 1
            keep[idx] = False
    if +pending:
        raise InvalidInputError(
            "Crossover parents must be permutations of the same gene multiset.",
            value=sorted((+pending).elements()),
        )
    return source[keep]


def segment_crossover(
    father: GenomeArray,
    mother: GenomeArray,
    start: int,
    end: int,
) -> GenomeArray:
    """
    Build one offspring from an inclusive father segment and the mother's order.

    The father's genes at ``[start, end]`` keep their positions in the child.
    The remaining positions are filled, left to right, with the mother's genes
    that are not already in the segment.
    """
    n = father.size
    if mother.size != n:
        raise InvalidConfigurationError("mother", mother.size, f"a genome of the father's length ({n})")
    if not 0 <= start <= end < n:
        raise InvalidConfigurationError("window", (start, end), f"0 <= start <= end < {n}")
    segment = father[start : end + 1]
    remainder = multiset_difference(mother, segment)
    return np.concatenate([remainder[:start], segment, remainder[start:]])


def distinct_pair(length: int, rng: RNG) -> tuple[int, int]:
    """Draw two different positions uniformly from ``[0, length)``."""
    a = int(rng.integers(0, length))
    b = int(rng.integers(0, length - 1))
    if b >= a:
        b += 1
    return a, b


def swap_mutation(
    genomes: Sequence[GenomeArray],
    prob: float,
    rng: RNG,
) -> np.ndarray:
    """
    Swap two random genes in each genome with probability ``prob``, in place.

    One uniform draw per genome decides whether it mutates. The two positions
    are always distinct; genomes shorter than 2 are left as they are.
    Returns the boolean mask of genomes that drew a mutation.
    """
    n_rows = len(genomes)
    mutated = np.zeros(n_rows, dtype=bool)
    if n_rows == 0:
        return mutated
    draws = rng.random(n_rows)
    for row, genome in enumerate(genomes):
        if draws[row] >= prob:
            continue
        mutated[row] = True
        if genome.size < 2:
            continue
        a, b = distinct_pair(genome.size, rng)
        genome[a], genome[b] = genome[b], genome[a]
    return mutated


__all__ = [
    "GenomeArray",
    "as_genome",
    "random_permutations",
    "crossover_window",
    "multiset_difference",
    "segment_crossover",
    "distinct_pair",
    "swap_mutation",
]
