"""
Logging configuration for SimpleGraticule package.

All package loggers live under ``simple_graticule``. A single console
handler (and optionally a file handler) is attached to that logger.

Redraws happen on every pan and zoom, so DEBUG output for the whole package
is noisy. Individual stages can be traced instead: ``trace=["interval"]``
logs each interval choice at DEBUG while the rest of the package stays at
the base level.
"""

import logging
import os
import sys
from typing import Iterable, List, Optional

from .exceptions import InvalidParameterError


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

LOGGER_NAME = "simple_graticule"
LOG_LEVEL_ENV = "SIMPLE_GRATICULE_LOG_LEVEL"
TRACE_ENV = "SIMPLE_GRATICULE_TRACE"

# Traceable stages -> module loggers
MODULE_LOGGERS = {
    "interval": f"{LOGGER_NAME}.interval",
    "lines": f"{LOGGER_NAME}.lines",
    "overlay": f"{LOGGER_NAME}.overlay",
    "host": f"{LOGGER_NAME}.host",
    "api": f"{LOGGER_NAME}.api",
}


def _resolve_trace(trace: Optional[Iterable[str]]) -> List[str]:
    names = list(trace or [])
    env_trace = os.environ.get(TRACE_ENV, "")
    names.extend(name.strip() for name in env_trace.split(",") if name.strip())

    unknown = sorted(set(names) - set(MODULE_LOGGERS))
    if unknown:
        known = ", ".join(sorted(MODULE_LOGGERS))
        raise InvalidParameterError(f"Cannot trace {unknown}. Known stages: {known}")
    return sorted(set(names))


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    trace: Optional[Iterable[str]] = None
) -> None:
    """
    Configure logging for SimpleGraticule package.

    Args:
        verbosity: Verbosity level (0=INFO, 1=DEBUG, -1=WARNING, -2=ERROR)
        log_file: Optional path to log file for file output
        trace: Stage names from MODULE_LOGGERS to log at DEBUG regardless
            of verbosity

    Environment Variables:
        SIMPLE_GRATICULE_LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR)
        SIMPLE_GRATICULE_TRACE: Comma-separated stages added to ``trace``

    Raises:
        InvalidParameterError: If a traced stage is unknown

    Example:
        >>> setup_logging(verbosity=-1, trace=["interval"])
        >>> setup_logging(log_file="graticule.log")
    """
    if verbosity >= 1:
        level = logging.DEBUG
    elif verbosity == 0:
        level = logging.INFO
    elif verbosity == -1:
        level = logging.WARNING
    else:
        level = logging.ERROR

    env_level = os.environ.get(LOG_LEVEL_ENV, "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = getattr(logging, env_level)

    traced = _resolve_trace(trace)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    # Module loggers inherit the package level unless traced.
    for stage, name in MODULE_LOGGERS.items():
        logging.getLogger(name).setLevel(logging.DEBUG if stage in traced else logging.NOTSET)

    # Handlers pass everything; levels are decided per logger.
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter(DEFAULT_FORMAT if verbosity >= 0 else SIMPLE_FORMAT)
    )
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Logging to file: {log_file}")
        except OSError as e:
            logger.warning(f"Failed to create log file {log_file}: {e}")

    logger.debug(
        f"Logging configured: level={logging.getLevelName(level)}, traced={traced or 'none'}"
    )
