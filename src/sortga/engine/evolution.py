# engine/evolution.py
"""
Generation step for the sorting GA.

One call to ``EvolutionEngine.evolve`` turns a population into the next one:
- elitism: a copy of the current best individual goes first
- sequential-pair crossover: member i fathers a child with member i + 1
- swap mutation over the new population (optionally sparing the elite)
"""

from __future__ import annotations

import logging

import numpy as np

from sortga.engine.individual import Individual
from sortga.engine.population import Population
from sortga.foundation.exceptions import InvalidConfigurationError
from sortga.operators.permutation import (
    GenomeArray,
    crossover_window,
    segment_crossover,
    swap_mutation,
)


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _check_rate(rate: float) -> float:
    try:
        value = float(rate)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError("mutation_rate", rate, "a float in [0, 1]") from exc
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationError("mutation_rate", rate, "a float in [0, 1]")
    return value


class EvolutionEngine:
    """
    Crossover, mutation and the per-generation orchestration.

    Parameters
    ----------
    rng : np.random.Generator | None
        Source of crossover windows and mutation draws. A fresh unseeded
        generator is used when omitted.
    protect_elite : bool
        When true, the mutation pass in ``evolve`` skips the elite slot so the
        best known individual survives the generation it was promoted in.
    """

    def __init__(self, rng: np.random.Generator | None = None, protect_elite: bool = False) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.protect_elite = bool(protect_elite)

    def evolve(self, population: Population, mutation_rate: float) -> Population:
        """Build the next generation; the input population is left untouched."""
        rate = _check_rate(mutation_rate)
        elite = population.best_individual()
        if elite is None:
            raise InvalidConfigurationError("population", "empty", "a population with at least one individual")

        new_population = Population([elite.copy()])
        members = population.individuals
        for father, mother in zip(members, members[1:]):
            start, end = self.crossover_window(len(father))
            new_population.add(Individual(self.crossover(father.genome, mother.genome, start, end)))

        self.mutate(new_population, rate, start=1 if self.protect_elite else 0)
        _logger().debug(
            "Evolved population of %d (elite fitness %d, protect_elite=%s)",
            len(new_population),
            new_population[0].fitness(),
            self.protect_elite,
        )
        return new_population

    def crossover(
        self,
        father_genome: GenomeArray,
        mother_genome: GenomeArray,
        start_index: int,
        end_index: int,
    ) -> GenomeArray:
        """
        Cross ``father_genome[start_index..end_index]`` into the mother's gene order.

        Both indices are inclusive. The father's segment keeps its position in
        the offspring; the mother's remaining genes fill the other slots in
        her order. The window ``[0, len - 1]`` reproduces the father.
        """
        father = np.asarray(father_genome)
        mother = np.asarray(mother_genome)
        if father.size == 0 and mother.size == 0:
            return father.copy()
        return segment_crossover(father, mother, int(start_index), int(end_index))

    def crossover_window(self, length: int) -> tuple[int, int]:
        return crossover_window(length, self.rng)

    def mutate(self, population: Population, rate: float, start: int = 0) -> Population:
        """
        Apply swap mutation in place to every individual from ``start`` on.

        Each individual mutates independently with probability ``rate``.
        """
        rate = _check_rate(rate)
        if start < 0:
            raise InvalidConfigurationError("start", start, "a non-negative index")
        genomes = [individual.genome for individual in population.individuals[start:]]
        mutated = swap_mutation(genomes, rate, self.rng)
        _logger().debug("Mutation drew %d of %d individuals", int(mutated.sum()), len(genomes))
        return population


__all__ = ["EvolutionEngine"]
