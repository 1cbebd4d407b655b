from __future__ import annotations

import logging
from typing import TextIO

SORTGA_LOGGER_NAME = "sortga"
DEFAULT_FORMAT = "[sortga] %(levelname)s %(name)s: %(message)s"


def configure_sortga_logging(
    *,
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO | None = None,
) -> logging.Handler | None:
    """
    Attach a console handler to the ``sortga`` logger.

    Run progress ("Starting run ...", "Sorted individual found at generation N")
    is logged under ``sortga.engine.*``; the default format keeps the module
    name so engine and CLI messages can be told apart on stderr.

    Parameters
    ----------
    level : int
        Level set on the ``sortga`` logger.
    fmt : str
        Format string for the handler.
    stream : TextIO | None
        Target stream; ``sys.stderr`` when omitted.

    Returns
    -------
    logging.Handler | None
        The new handler, or ``None`` when logging was already configured by the
        application (root or ``sortga`` handlers present) and nothing changed.
    """
    root = logging.getLogger()
    sortga_logger = logging.getLogger(SORTGA_LOGGER_NAME)
    if root.handlers or sortga_logger.handlers:
        return None

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    sortga_logger.addHandler(handler)
    sortga_logger.setLevel(level)
    sortga_logger.propagate = False
    return handler


__all__ = ["configure_sortga_logging", "DEFAULT_FORMAT", "SORTGA_LOGGER_NAME"]
