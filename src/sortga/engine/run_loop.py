# engine/run_loop.py
"""
Generation loop for the sorting GA.

The loop seeds a random population, then evolves it until some individual is
fully ascending (fitness equal to the genome length). The generation counter
starts at 1 for the seeded population. An input that is already ascending
ends the run at generation 1.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from numbers import Integral
from typing import Any

import numpy as np

from sortga.engine.config import GAConfig
from sortga.engine.evolution import EvolutionEngine
from sortga.engine.individual import Individual
from sortga.engine.population import Population
from sortga.foundation.exceptions import ConvergenceError, InvalidInputError
from sortga.foundation.observer import NoOpObserver, RunContext, RunObserver, observer_should_stop


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    generation: int
    converged: bool
    best: tuple[int, ...]
    best_fitness: int
    trial: Any = None
    history: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["best"] = list(self.best)
        data["history"] = list(self.history)
        return data


def validate_genes(values: Sequence[int]) -> tuple[int, ...]:
    genes = tuple(values)
    for value in genes:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidInputError(f"Gene values must be integers; got {value!r}.", value=value)
    return tuple(int(v) for v in genes)


class RunLoop:
    """
    Drives successive generations until the best individual is sorted.

    Parameters
    ----------
    config : GAConfig
        Population size, mutation rate, seed, elite protection and the
        optional generation cap.
    engine : EvolutionEngine | None
        Engine to evolve with. Built from ``config`` when omitted; its random
        generator is also used to seed the initial population.
    observer : RunObserver | None
        Lifecycle callbacks. An observer whose ``should_stop()`` returns true
        ends the run early with ``converged=False``.
    """

    def __init__(
        self,
        config: GAConfig,
        engine: EvolutionEngine | None = None,
        observer: RunObserver | None = None,
    ) -> None:
        config.validate()
        self.config = config
        if engine is None:
            engine = EvolutionEngine(rng=np.random.default_rng(config.seed), protect_elite=config.protect_elite)
        self.engine = engine
        self.observer = observer or NoOpObserver()

    def run(self, values: Sequence[int], trial: Any = None) -> RunResult:
        genes = validate_genes(values)
        target = len(genes)
        cfg = self.config
        if target == 0:
            _logger().warning("Empty gene sequence; the run converges immediately at generation 1.")
        elif len(set(genes)) < target:
            _logger().warning(
                "Repeated gene values can never form a strictly increasing run of full length; "
                "the run ends only at max_generations or when an observer stops it."
            )

        self.observer.on_start(RunContext(values=genes, config=cfg, trial=trial))
        _logger().info(
            "Starting run (trial=%s, genes=%d, population_size=%d, mutation_rate=%s)",
            trial,
            target,
            cfg.population_size,
            cfg.mutation_rate,
        )

        population = Population.seed_random(genes, cfg.population_size, self.engine.rng)
        # An ascending input is the optimum; it joins generation 1 in place of a shuffle.
        given = Individual(genes)
        if target > 0 and given.is_sorted():
            _logger().info("Input is already in ascending order; nothing to evolve.")
            population.individuals[0] = given
        generation = 1
        history: list[int] = []
        best_fitness = self._observe(population, generation, history)
        stopped = observer_should_stop(self.observer)

        while best_fitness < target and not stopped:
            if cfg.max_generations is not None and generation >= cfg.max_generations:
                raise ConvergenceError(
                    f"No sorted individual after {generation} generations (best fitness {best_fitness} of {target}).",
                    generation=generation,
                    best_fitness=best_fitness,
                )
            population = self.engine.evolve(population, cfg.mutation_rate)
            generation += 1
            best_fitness = self._observe(population, generation, history)
            stopped = observer_should_stop(self.observer)

        best = population.best_individual()
        assert best is not None, "population unexpectedly empty"
        return self._finish(best, best_fitness, generation, target, trial, history)

    def _finish(
        self,
        best: Individual,
        best_fitness: int,
        generation: int,
        target: int,
        trial: Any,
        history: list[int],
    ) -> RunResult:
        result = RunResult(
            generation=generation,
            converged=best_fitness >= target,
            best=tuple(int(v) for v in best.genome),
            best_fitness=best_fitness,
            trial=trial,
            history=tuple(history),
        )
        if result.converged:
            _logger().info("Sorted individual found at generation %d", generation)
        else:
            _logger().info("Run stopped by observer at generation %d (best fitness %d)", generation, best_fitness)
        self.observer.on_end(result)
        return result

    def _observe(self, population: Population, generation: int, history: list[int]) -> int:
        fitness = population.fitness_values()
        best_fitness = int(fitness.max(initial=0))
        history.append(best_fitness)
        self.observer.on_generation(generation, fitness, stats={"best_fitness": best_fitness})
        _logger().debug("Generation %d: best fitness %d", generation, best_fitness)
        return best_fitness


def run_until_sorted(
    values: Sequence[int],
    population_size: int,
    mutation_rate: float,
    *,
    seed: int | None = None,
    protect_elite: bool = False,
    max_generations: int | None = None,
    trial: Any = None,
    observer: RunObserver | None = None,
) -> int:
    """Run the GA on ``values`` and return the generation that produced a sorted individual."""
    config = GAConfig(
        population_size=population_size,
        mutation_rate=mutation_rate,
        seed=seed,
        protect_elite=protect_elite,
        max_generations=max_generations,
    )
    return RunLoop(config, observer=observer).run(values, trial=trial).generation


__all__ = ["RunLoop", "RunResult", "run_until_sorted", "validate_genes"]
