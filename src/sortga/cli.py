"""
CLI argument parsing and the command entry point.
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from typing import Any, Sequence

from sortga.config.loader import load_run_spec
from sortga.engine.config import DEFAULT_MUTATION_RATE, DEFAULT_POPULATION_SIZE, GAConfig
from sortga.experiment import VARY_MODES, TrialRecord, format_plot_point, parse_genes, run_trials, write_records
from sortga.foundation.exceptions import OptimizationError, SortGAError
from sortga.foundation.logging import configure_sortga_logging
from sortga.foundation.version import get_version

DEFAULT_INPUT = "5,4,3,2,1"
OUTPUT_FORMATS = ("points", "json", "csv")


def _parse_probability_arg(parser: argparse.ArgumentParser, flag: str, raw: Any) -> float:
    text = str(raw).strip()
    try:
        value = float(text)
    except ValueError:
        parser.error(f"{flag} must be a float in [0, 1]; got '{text}'.")
    if not 0.0 <= value <= 1.0:
        parser.error(f"{flag} must be within [0, 1].")
    return value


def _parse_positive_int(parser: argparse.ArgumentParser, flag: str, raw: Any, *, allow_none: bool = False) -> int | None:
    if raw is None and allow_none:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        parser.error(f"{flag} must be an integer; got '{raw}'.")
    if value < 1:
        parser.error(f"{flag} must be >= 1.")
    return value


def _spec_input(spec: dict[str, Any]) -> str:
    raw = spec.get("input", DEFAULT_INPUT)
    if isinstance(raw, (list, tuple)):
        return ",".join(str(v) for v in raw)
    return str(raw)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        help="Path to a YAML/JSON run specification. CLI arguments override file values.",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)

    spec: dict[str, Any] = {}
    if pre_args.config:
        spec = load_run_spec(pre_args.config)

    def _spec_default(key: str, fallback):
        return spec.get(key, fallback)

    parser = argparse.ArgumentParser(
        prog="sortga",
        description="Evolve permutations of an integer list until one is sorted; report the generation reached.",
        parents=[pre_parser],
    )
    parser.add_argument(
        "--input",
        default=_spec_input(spec),
        help="Comma-separated integers to sort (default: %(default)s).",
    )
    parser.add_argument(
        "--population-size",
        default=_spec_default("population_size", DEFAULT_POPULATION_SIZE),
        help="Individuals per generation (default: %(default)s).",
    )
    parser.add_argument(
        "--mutation-rate",
        default=_spec_default("mutation_rate", DEFAULT_MUTATION_RATE),
        help="Per-individual swap mutation probability in [0, 1] (default: %(default)s).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=_spec_default("seed", None),
        help="Seed for reproducible runs (default: unseeded).",
    )
    parser.add_argument(
        "--protect-elite",
        action="store_true",
        default=bool(_spec_default("protect_elite", False)),
        help="Keep the promoted elite out of that generation's mutation pass.",
    )
    parser.add_argument(
        "--max-generations",
        default=_spec_default("max_generations", None),
        help="Give up after this many generations (default: unbounded).",
    )
    parser.add_argument(
        "--trials",
        default=_spec_default("trials", 1),
        help="Number of independent runs (default: %(default)s).",
    )
    parser.add_argument(
        "--vary",
        choices=VARY_MODES,
        default=_spec_default("vary", "none"),
        help="'population_size' sweeps the population size 1..trials; 'none' repeats the same setup.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=_spec_default("format", "points"),
        help="Output format on stdout (default: %(default)s).",
    )
    parser.add_argument(
        "--output",
        default=_spec_default("output", None),
        help="Also write trial records to this .csv or .json file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log run progress to stderr (-vv for every generation).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    args = parser.parse_args(argv)
    args.population_size = _parse_positive_int(parser, "--population-size", args.population_size)
    args.mutation_rate = _parse_probability_arg(parser, "--mutation-rate", args.mutation_rate)
    args.max_generations = _parse_positive_int(parser, "--max-generations", args.max_generations, allow_none=True)
    args.trials = _parse_positive_int(parser, "--trials", args.trials)
    return args


def _emit(records: list[TrialRecord], fmt: str, vary: str) -> None:
    if fmt == "json":
        print(json.dumps([record.to_dict() for record in records], indent=2, sort_keys=True))
        return
    if fmt == "csv":
        writer = csv.DictWriter(sys.stdout, fieldnames=list(TrialRecord.__dataclass_fields__))
        writer.writeheader()
        writer.writerows(record.to_dict() for record in records)
        return
    for record in records:
        x = record.population_size if vary == "population_size" else record.trial
        print(format_plot_point(x, record.generation))


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except SortGAError as exc:
        print(f"sortga: error: {exc}", file=sys.stderr)
        return 2

    if args.verbose:
        configure_sortga_logging(level=logging.DEBUG if args.verbose > 1 else logging.INFO)

    try:
        genes = parse_genes(args.input)
        config = GAConfig(
            population_size=args.population_size,
            mutation_rate=args.mutation_rate,
            seed=args.seed,
            protect_elite=args.protect_elite,
            max_generations=args.max_generations,
        )
        records = run_trials(genes, config, args.trials, vary=args.vary)
    except OptimizationError as exc:
        print(f"sortga: {exc}", file=sys.stderr)
        return 1
    except SortGAError as exc:
        print(f"sortga: error: {exc}", file=sys.stderr)
        return 2

    _emit(records, args.format, args.vary)
    if args.output:
        write_records(records, args.output)
    return 0


__all__ = ["parse_args", "main"]
