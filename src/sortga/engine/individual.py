"""Candidate permutation and its sortedness fitness."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from sortga.operators.permutation import GenomeArray, as_genome


def greedy_run_length(genome: GenomeArray) -> int:
    """
    Count the genes kept by a left-to-right greedy scan.

    A gene is kept when it is strictly greater than the last kept gene. The
    last kept gene is always the running maximum, so a gene is kept exactly
    when it exceeds the maximum of everything before it. This is not the
    longest increasing subsequence: ``[3, 1, 4, 1, 5, 9, 2, 6]`` scores 4.
    """
    if genome.size == 0:
        return 0
    running_max = np.maximum.accumulate(genome)
    return 1 + int(np.count_nonzero(genome[1:] > running_max[:-1]))


class Individual:
    """
    A candidate ordering of the input genes.

    The genome array is owned by the individual; the constructor copies its
    input so that no two individuals share storage. Fitness is recomputed on
    every call.
    """

    __slots__ = ("genome",)

    def __init__(self, genome: Sequence[int] | GenomeArray) -> None:
        self.genome: GenomeArray = as_genome(genome)

    def fitness(self) -> int:
        return greedy_run_length(self.genome)

    def is_sorted(self) -> bool:
        return self.fitness() == self.genome.size

    def copy(self) -> Individual:
        return Individual(self.genome)

    def __len__(self) -> int:
        return int(self.genome.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return bool(np.array_equal(self.genome, other.genome))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Individual(genome={self.genome.tolist()}, fitness={self.fitness()})"


__all__ = ["Individual", "greedy_run_length"]
