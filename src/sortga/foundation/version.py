"""
Installed-distribution version lookup for sortga.
"""

from __future__ import annotations

from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "sortga"
UNKNOWN_VERSION = "0.0.0+unknown"

_VERSION: str | None = None


def get_version() -> str:
    """Return the installed sortga version, cached after the first lookup."""
    global _VERSION
    if _VERSION is None:
        try:
            _VERSION = importlib_metadata.version(DISTRIBUTION_NAME)
        except importlib_metadata.PackageNotFoundError:  # pragma: no cover - source checkout
            _VERSION = UNKNOWN_VERSION
    return _VERSION


__all__ = ["DISTRIBUTION_NAME", "UNKNOWN_VERSION", "get_version"]
