from .loader import load_run_spec

__all__ = ["load_run_spec"]
