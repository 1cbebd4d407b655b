"""
Trial sweeps and the text formats around a run.

Parsing the comma-separated gene list and formatting plot points are kept
here so the engine only ever sees integer sequences and returns generation
counts.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from sortga.engine.config import GAConfig
from sortga.engine.run_loop import RunLoop
from sortga.foundation.exceptions import InvalidConfigurationError, InvalidInputError
from sortga.foundation.observer import RunObserver

VARY_MODES = ("none", "population_size")


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialRecord:
    trial: int
    population_size: int
    mutation_rate: float
    generation: int
    converged: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_genes(text: str) -> list[int]:
    """Parse ``"5, 4,3"`` into ``[5, 4, 3]``; blank text gives an empty list."""
    if not text.strip():
        return []
    genes: list[int] = []
    for token in text.split(","):
        token = token.strip()
        try:
            genes.append(int(token))
        except ValueError as exc:
            raise InvalidInputError(f"Cannot parse gene value '{token}' as an integer.", value=token) from exc
    return genes


def format_plot_point(x: Any, y: Any) -> str:
    return f"{{ x: {x}, y: {y}}},"


def _trial_seeds(seed: int | None, trials: int) -> list[int | None]:
    if seed is None:
        return [None] * trials
    children = np.random.SeedSequence(seed).spawn(trials)
    return [int(child.generate_state(1)[0]) for child in children]


def run_trials(
    values: Sequence[int],
    config: GAConfig,
    trials: int,
    vary: str = "none",
    observer: RunObserver | None = None,
) -> list[TrialRecord]:
    """
    Run ``trials`` independent runs of ``values``.

    With ``vary="population_size"`` trial ``i`` (1-based) uses population size
    ``i``; with ``vary="none"`` every trial uses ``config`` as given. Each
    trial draws its own seed from ``config.seed`` so the sweep is reproducible.
    """
    if trials < 1:
        raise InvalidConfigurationError("trials", trials, "an integer >= 1")
    if vary not in VARY_MODES:
        raise InvalidConfigurationError("vary", vary, f"one of {', '.join(VARY_MODES)}")

    records: list[TrialRecord] = []
    for idx, trial_seed in enumerate(_trial_seeds(config.seed, trials), start=1):
        trial_cfg = config.replace(seed=trial_seed)
        if vary == "population_size":
            trial_cfg = trial_cfg.replace(population_size=idx)
        result = RunLoop(trial_cfg, observer=observer).run(values, trial=idx)
        records.append(
            TrialRecord(
                trial=idx,
                population_size=trial_cfg.population_size,
                mutation_rate=trial_cfg.mutation_rate,
                generation=result.generation,
                converged=result.converged,
            )
        )
    _logger().info("Completed %d trials (vary=%s)", len(records), vary)
    return records


def write_records(records: Iterable[TrialRecord], path: str | Path) -> Path:
    """Write trial records to ``path`` as CSV (``.csv``) or JSON (anything else)."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    rows = [record.to_dict() for record in records]
    if out_path.suffix.lower() == ".csv":
        with out_path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.DictWriter(fh, fieldnames=list(TrialRecord.__dataclass_fields__))
            writer.writeheader()
            writer.writerows(rows)
    else:
        with out_path.open("w", encoding="utf-8") as fh:
            json.dump(rows, fh, indent=2, sort_keys=True)
    return out_path


__all__ = [
    "VARY_MODES",
    "TrialRecord",
    "parse_genes",
    "format_plot_point",
    "run_trials",
    "write_records",
]
