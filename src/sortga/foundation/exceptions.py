"""
sortga exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All sortga-specific exceptions inherit from SortGAError for easy catching.

Example:
    try:
        generation = run_until_sorted(values, population_size=0, mutation_rate=0.05)
    except SortGAError as e:
        print(f"Run failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class SortGAError(Exception):
    """
    Base exception for all sortga errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(SortGAError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration value is outside its valid range."""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        message = f"Invalid value for '{field}': {value!r}."
        suggestion = f"'{field}' must be {expected}"
        super().__init__(message, suggestion, {"field": field, "value": value})


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Input Errors
# =============================================================================


class InputError(SortGAError):
    """Base class for errors in the gene values handed to a run."""

    pass


class InvalidInputError(InputError):
    """Raised when gene values cannot be used to build genomes."""

    def __init__(self, message: str, value: Any = None) -> None:
        suggestion = "Provide a comma-separated list of integers, e.g. '5,4,3,2,1'"
        super().__init__(message, suggestion, {"value": value})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(SortGAError):
    """Raised when optimization fails during execution."""

    pass


class ConvergenceError(OptimizationError):
    """Raised when a run hits its generation cap without a sorted individual."""

    def __init__(
        self,
        message: str,
        generation: int | None = None,
        best_fitness: int | None = None,
    ) -> None:
        suggestion = "Try raising max_generations, the population size or the mutation rate"
        super().__init__(message, suggestion, {"generation": generation, "best_fitness": best_fitness})


# =============================================================================
# Data/IO Errors
# =============================================================================


class DataError(SortGAError):
    """Base class for data-related errors."""

    pass


class ConfigFileError(DataError):
    """Raised when a run specification file cannot be used."""

    def __init__(self, message: str, path: str | None = None) -> None:
        suggestion = "Use a readable .json, .yaml or .yml file containing a mapping"
        super().__init__(message, suggestion, {"path": path})


# =============================================================================
# Dependency Errors
# =============================================================================


class DependencyError(SortGAError):
    """Raised when an optional dependency is missing."""

    def __init__(self, package: str, feature: str, install_cmd: str | None = None) -> None:
        message = f"'{package}' is required for {feature} but not installed."
        install_cmd = install_cmd or f"pip install {package}"
        suggestion = f"Install with: {install_cmd}"
        super().__init__(message, suggestion, {"package": package, "feature": feature})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "SortGAError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigError",
    # Input
    "InputError",
    "InvalidInputError",
    # Runtime
    "OptimizationError",
    "ConvergenceError",
    # Data/IO
    "DataError",
    "ConfigFileError",
    # Dependencies
    "DependencyError",
]
