from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional

from sortga.foundation.exceptions import InvalidConfigurationError, MissingConfigError

DEFAULT_POPULATION_SIZE = 10
DEFAULT_MUTATION_RATE = 0.005


class _SerializableConfig:
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


def _numeric(name: str, value: Any, cast: Callable[[Any], Any], expected: str) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidConfigurationError(name, value, expected) from exc


@dataclass(frozen=True)
class GAConfig(_SerializableConfig):
    """
    Settings for one sorting run.

    ``protect_elite`` keeps the promoted elite out of the mutation pass of the
    generation it was promoted in. ``max_generations`` of None leaves the run
    unbounded.
    """

    population_size: int = DEFAULT_POPULATION_SIZE
    mutation_rate: float = DEFAULT_MUTATION_RATE
    seed: Optional[int] = None
    protect_elite: bool = False
    max_generations: Optional[int] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int) or self.population_size < 1:
            raise InvalidConfigurationError("population_size", self.population_size, "an integer >= 1")
        rate = _numeric("mutation_rate", self.mutation_rate, float, "a float in [0, 1]")
        if not 0.0 <= rate <= 1.0:
            raise InvalidConfigurationError("mutation_rate", self.mutation_rate, "a float in [0, 1]")
        if self.max_generations is not None:
            expected = "None or an integer >= 1"
            if _numeric("max_generations", self.max_generations, int, expected) < 1:
                raise InvalidConfigurationError("max_generations", self.max_generations, expected)
        if self.seed is not None:
            expected = "None or a non-negative integer"
            if _numeric("seed", self.seed, int, expected) < 0:
                raise InvalidConfigurationError("seed", self.seed, expected)

    @classmethod
    def default(cls) -> GAConfig:
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GAConfig:
        """Build a config from a mapping, ignoring keys that are not config fields."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        return cls(**kwargs)

    def replace(self, **changes: Any) -> GAConfig:
        merged = {**self.to_dict(), **changes}
        return GAConfig(**merged)


def _require_fields(cfg: Dict[str, Any], required: tuple[str, ...]) -> None:
    for name in required:
        if name not in cfg:
            raise MissingConfigError(name, "GAConfig")


class GAConfigBuilder:
    """
    Declarative configuration holder for a sorting run.
    """

    def __init__(self):
        self._cfg: Dict[str, Any] = {}

    def population_size(self, value: int):
        self._cfg["population_size"] = int(value)
        return self

    def mutation_rate(self, value: float):
        self._cfg["mutation_rate"] = float(value)
        return self

    def seed(self, value: int | None):
        self._cfg["seed"] = None if value is None else int(value)
        return self

    def protect_elite(self, value: bool = True):
        self._cfg["protect_elite"] = bool(value)
        return self

    def max_generations(self, value: int | None):
        self._cfg["max_generations"] = None if value is None else int(value)
        return self

    def fixed(self) -> GAConfig:
        _require_fields(self._cfg, ("population_size", "mutation_rate"))
        return GAConfig(**self._cfg)


__all__ = [
    "DEFAULT_POPULATION_SIZE",
    "DEFAULT_MUTATION_RATE",
    "GAConfig",
    "GAConfigBuilder",
]
