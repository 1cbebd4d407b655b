"""Ordered collection of individuals."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from sortga.engine.individual import Individual
from sortga.foundation.exceptions import InvalidConfigurationError
from sortga.operators.permutation import GenomeArray, random_permutations


class Population:
    """
    Individuals in a meaningful order.

    Adjacent members are crossover partners, so iteration order is part of
    the population's state.
    """

    def __init__(self, individuals: Iterable[Individual] | None = None) -> None:
        self.individuals: list[Individual] = list(individuals or [])

    @classmethod
    def seed_random(
        cls,
        base_sequence: Sequence[int] | GenomeArray,
        size: int,
        rng: np.random.Generator,
    ) -> Population:
        """
        Build ``size`` individuals, each an independent uniform shuffle of ``base_sequence``.

        Parameters
        ----------
        base_sequence : Sequence[int] | np.ndarray
            Gene values to permute. Duplicates are kept.
        size : int
            Number of individuals to create.
        rng : np.random.Generator
            Source of the shuffles.
        """
        if size < 0:
            raise InvalidConfigurationError("size", size, "a non-negative integer")
        return cls(Individual(genome) for genome in random_permutations(base_sequence, size, rng))

    def add(self, individual: Individual) -> None:
        self.individuals.append(individual)

    def best_individual(self) -> Individual | None:
        """Return the first individual with the highest fitness, or None when empty."""
        best: Individual | None = None
        best_fitness = -1
        for individual in self.individuals:
            fitness = individual.fitness()
            if fitness > best_fitness:
                best_fitness = fitness
                best = individual
        return best

    def fitness_values(self) -> np.ndarray:
        return np.fromiter((ind.fitness() for ind in self.individuals), dtype=np.int64, count=len(self.individuals))

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def __repr__(self) -> str:
        return f"Population(size={len(self)})"


__all__ = ["Population"]
