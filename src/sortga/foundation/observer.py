from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from sortga.engine.config import GAConfig
    from sortga.engine.run_loop import RunResult


@dataclass
class RunContext:
    """
    Encapsulates the static context of a run.
    Passed to on_start events.
    """

    values: tuple[int, ...]
    config: GAConfig
    trial: Any = None

    @property
    def genome_length(self) -> int:
        return len(self.values)


@runtime_checkable
class RunObserver(Protocol):
    """
    Observer interface for the run loop.
    Reacts to lifecycle events of a run.
    """

    def on_start(self, ctx: RunContext) -> None:
        """Called once before the first generation is evaluated."""
        ...

    def on_generation(
        self,
        generation: int,
        fitness: np.ndarray,
        stats: dict[str, Any] | None = None,
    ) -> None:
        """Called for the initial population and after every evolve step."""
        ...

    def on_end(self, result: RunResult) -> None:
        """Called once at the end of the run."""
        ...


class NoOpObserver:
    """Default no-op implementation."""

    def on_start(self, ctx: RunContext) -> None:
        return None

    def on_generation(
        self,
        generation: int,
        fitness: np.ndarray,
        stats: dict[str, Any] | None = None,
    ) -> None:
        return None

    def on_end(self, result: RunResult) -> None:
        return None


@dataclass
class HistoryObserver:
    """
    Records best and mean fitness for every generation.

    Set ``stop_after`` to request an early stop once that many generations
    have been observed.
    """

    stop_after: int | None = None
    generations: list[int] = field(default_factory=list)
    best_fitness: list[int] = field(default_factory=list)
    mean_fitness: list[float] = field(default_factory=list)
    finished: RunResult | None = None

    def on_start(self, ctx: RunContext) -> None:
        self.generations.clear()
        self.best_fitness.clear()
        self.mean_fitness.clear()
        self.finished = None

    def on_generation(
        self,
        generation: int,
        fitness: np.ndarray,
        stats: dict[str, Any] | None = None,
    ) -> None:
        self.generations.append(int(generation))
        self.best_fitness.append(int(fitness.max(initial=0)))
        self.mean_fitness.append(float(fitness.mean()) if fitness.size else 0.0)

    def on_end(self, result: RunResult) -> None:
        self.finished = result

    def should_stop(self) -> bool:
        return self.stop_after is not None and len(self.generations) >= self.stop_after


def observer_should_stop(observer: RunObserver) -> bool:
    should_stop = getattr(observer, "should_stop", None)
    if not callable(should_stop):
        return False
    return bool(should_stop())


__all__ = ["RunContext", "RunObserver", "NoOpObserver", "HistoryObserver", "observer_should_stop"]
