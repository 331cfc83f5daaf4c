"""
Logging helpers for tapfilter.

Loggers live under the ``tapfilter.`` namespace, are cached, and write
``[LEVEL] name: message`` lines to stderr. The default level is WARNING so
the library stays quiet unless asked.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_DEFAULT_LEVEL = logging.WARNING

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get or create a package logger.

    Args:
        name: Usually ``__name__`` of the calling module. None returns the
            package root logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from tapfilter.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("FIR filter with 5 taps")
    """
    if name is None:
        name = "tapfilter"

    if name == "tapfilter" or name.startswith("tapfilter."):
        logger_name = name
    else:
        logger_name = f"tapfilter.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Avoid stacking handlers when a module is reloaded
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.NOTSET)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the level of every tapfilter logger created so far (and the default
    for later ones).

    Args:
        level: ``logging.DEBUG`` etc., or a name such as ``"DEBUG"``.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    global _DEFAULT_LEVEL

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    _DEFAULT_LEVEL = level
    for logger in _loggers.values():
        logger.setLevel(level)
