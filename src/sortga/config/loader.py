"""
Run specification loading (JSON or YAML).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from sortga.foundation.exceptions import ConfigFileError, DependencyError


def load_run_spec(path: str | Path) -> Dict[str, Any]:
    """
    Read a run specification mapping from ``path``.

    ``.yaml``/``.yml`` files are parsed with PyYAML, everything else as JSON.
    An empty file yields an empty mapping.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise ConfigFileError(f"Config file '{spec_path}' does not exist.", path=str(spec_path))
    suffix = spec_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise DependencyError("pyyaml", "YAML run specifications") from exc
        with spec_path.open("r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                raise ConfigFileError(f"Config file '{spec_path}' is not valid YAML: {exc}", path=str(spec_path)) from exc
    else:
        with spec_path.open("r", encoding="utf-8") as fh:
            text = fh.read()
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise ConfigFileError(f"Config file '{spec_path}' is not valid JSON: {exc}", path=str(spec_path)) from exc
    if not isinstance(data, dict):
        raise ConfigFileError(f"Config file '{spec_path}' must contain a mapping.", path=str(spec_path))
    return data


__all__ = ["load_run_spec"]
