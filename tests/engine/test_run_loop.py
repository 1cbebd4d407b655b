import logging

import numpy as np
import pytest

from sortga.engine.config import GAConfig
from sortga.engine.evolution import EvolutionEngine
from sortga.engine.run_loop import RunLoop, run_until_sorted
from sortga.foundation.exceptions import ConvergenceError, InvalidConfigurationError, InvalidInputError
from sortga.foundation.observer import HistoryObserver

REVERSED_30 = list(range(30, 0, -1))


@pytest.mark.parametrize("population_size", [1, 3, 10])
@pytest.mark.parametrize("mutation_rate", [0.0, 0.5, 1.0])
def test_sorted_input_converges_at_generation_one(population_size, mutation_rate):
    assert run_until_sorted([1, 2, 3, 4, 5], population_size, mutation_rate, seed=0) == 1

    config = GAConfig(population_size=population_size, mutation_rate=mutation_rate, seed=0)
    result = RunLoop(config).run([1, 2, 3, 4, 5])
    assert result.generation == 1
    assert result.converged
    assert result.best == (1, 2, 3, 4, 5)
    assert result.best_fitness == 5


def test_reversed_input_converges_to_sorted_permutation():
    config = GAConfig(population_size=20, mutation_rate=0.05, seed=2024, max_generations=5000)
    result = RunLoop(config).run([5, 4, 3, 2, 1])

    assert result.converged
    assert result.generation >= 1
    assert sorted(result.best) == [1, 2, 3, 4, 5]
    assert result.best == (1, 2, 3, 4, 5)
    assert result.best_fitness == 5
    assert len(result.history) == result.generation
    assert result.history[-1] == 5


def test_runs_are_reproducible_for_a_seed():
    config = GAConfig(population_size=8, mutation_rate=0.1, seed=17, max_generations=5000)
    first = RunLoop(config).run([6, 2, 5, 1, 4, 3], trial="a")
    second = RunLoop(config).run([6, 2, 5, 1, 4, 3], trial="a")
    assert first == second
    assert first.to_dict()["best"] == list(first.best)


def test_empty_input_converges_immediately(caplog):
    with caplog.at_level(logging.WARNING, logger="sortga"):
        result = RunLoop(GAConfig(population_size=3, seed=1)).run([])
    assert result.generation == 1
    assert result.converged
    assert result.best == ()
    assert "Empty gene sequence" in caplog.text


def test_sorted_input_is_recorded_as_generation_one_best():
    observer = HistoryObserver()
    config = GAConfig(population_size=6, mutation_rate=0.5, seed=11)
    result = RunLoop(config, observer=observer).run([1, 2, 3, 4, 5])

    assert result.history == (5,)
    assert observer.generations == [1]
    assert observer.best_fitness == [5]
    assert observer.finished


def test_repeated_values_warn_and_stop_at_the_cap(caplog):
    config = GAConfig(population_size=4, mutation_rate=0.2, seed=6, max_generations=3)
    with caplog.at_level(logging.WARNING, logger="sortga"):
        with pytest.raises(ConvergenceError):
            RunLoop(config).run([3, 1, 1])
    assert "Repeated gene values" in caplog.text


def test_distinct_values_do_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="sortga"):
        RunLoop(GAConfig(population_size=4, seed=6, max_generations=2000)).run([3, 1, 2])
    assert "Repeated gene values" not in caplog.text


def test_single_individual_population_still_converges():
    config = GAConfig(population_size=1, mutation_rate=1.0, seed=5, max_generations=2000)
    result = RunLoop(config).run([2, 1, 3])
    assert result.converged
    assert result.best == (1, 2, 3)


def test_generation_cap_raises_convergence_error():
    config = GAConfig(population_size=4, mutation_rate=0.0, seed=3, max_generations=3)
    with pytest.raises(ConvergenceError) as excinfo:
        RunLoop(config).run(REVERSED_30)
    assert excinfo.value.details["generation"] == 3
    assert excinfo.value.details["best_fitness"] < 30


def test_observer_sees_every_generation_and_can_stop_the_run():
    observer = HistoryObserver(stop_after=3)
    config = GAConfig(population_size=4, mutation_rate=0.1, seed=3)
    result = RunLoop(config, observer=observer).run(REVERSED_30, trial=7)

    assert not result.converged
    assert result.generation == 3
    assert observer.generations == [1, 2, 3]
    assert list(result.history) == observer.best_fitness
    assert observer.finished is result
    assert result.trial == 7


def test_history_is_monotone_when_elite_is_protected():
    observer = HistoryObserver(stop_after=40)
    config = GAConfig(population_size=6, mutation_rate=0.5, seed=11, protect_elite=True)
    RunLoop(config, observer=observer).run(REVERSED_30)
    assert all(b >= a for a, b in zip(observer.best_fitness, observer.best_fitness[1:]))


def test_custom_engine_supplies_randomness():
    engine = EvolutionEngine(rng=np.random.default_rng(99), protect_elite=True)
    config = GAConfig(population_size=10, mutation_rate=0.05, max_generations=5000)
    result = RunLoop(config, engine=engine).run([3, 1, 2, 5, 4])
    assert result.converged


def test_run_logs_start_and_finish(caplog):
    with caplog.at_level(logging.INFO, logger="sortga"):
        run_until_sorted([2, 1], 4, 0.2, seed=0, max_generations=1000)
    assert "Starting run" in caplog.text
    assert "Sorted individual found at generation" in caplog.text


@pytest.mark.parametrize("values", [[1, "2"], [1.5, 2], [True, 2]])
def test_non_integer_genes_are_rejected(values):
    with pytest.raises(InvalidInputError):
        RunLoop(GAConfig(seed=0)).run(values)


def test_invalid_configuration_fails_fast():
    with pytest.raises(InvalidConfigurationError):
        run_until_sorted([2, 1], 0, 0.1)
    with pytest.raises(InvalidConfigurationError):
        run_until_sorted([2, 1], 5, 1.5)


def test_numpy_integer_genes_are_accepted():
    genes = np.array([3, 2, 1], dtype=np.int32)
    assert run_until_sorted(genes, 6, 0.1, seed=4, max_generations=2000) >= 1
