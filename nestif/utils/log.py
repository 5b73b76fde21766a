from __future__ import annotations

import logging
from typing import IO, Optional


LOGGER_NAME = "nestif"

_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Route the package logger to ``stream``.

    Warnings are always shown; ``verbose`` adds the per-file debug output.
    Calling it again replaces the handler installed by the previous call.
    """
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
