"""
sortga: a genetic algorithm that evolves integer permutations toward ascending order.
"""

from .engine.config import GAConfig, GAConfigBuilder
from .engine.evolution import EvolutionEngine
from .engine.individual import Individual
from .engine.population import Population
from .engine.run_loop import RunLoop, RunResult, run_until_sorted
from .experiment import TrialRecord, format_plot_point, parse_genes, run_trials
from .foundation.exceptions import (
    ConfigurationError,
    ConvergenceError,
    InvalidConfigurationError,
    InvalidInputError,
    SortGAError,
)
from .foundation.logging import configure_sortga_logging
from .foundation.observer import HistoryObserver, NoOpObserver, RunObserver
from .foundation.version import get_version


def __getattr__(name: str):
    if name == "__version__":
        return get_version()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "GAConfig",
    "GAConfigBuilder",
    "EvolutionEngine",
    "Individual",
    "Population",
    "RunLoop",
    "RunResult",
    "run_until_sorted",
    "TrialRecord",
    "format_plot_point",
    "parse_genes",
    "run_trials",
    "SortGAError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "InvalidInputError",
    "ConvergenceError",
    "configure_sortga_logging",
    "HistoryObserver",
    "NoOpObserver",
    "RunObserver",
    "get_version",
]
