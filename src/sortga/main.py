from __future__ import annotations

import sys
from pathlib import Path

# Allow running via `python src/sortga/main.py` without installing the package.
module_path = Path(__file__).resolve()
project_root = module_path.parents[1]
if __package__ is None or __package__ == "":
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

from sortga.cli import main as cli_main


def main() -> int:
    return cli_main()


if __name__ == "__main__":
    raise SystemExit(main())
