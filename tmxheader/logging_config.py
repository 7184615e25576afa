"""
Logging setup for tmxheader.

All modules log under the 'tmxheader' namespace; the CLI decides how much
of it reaches the console.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(verbose: bool = False, debug: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level (debug wins over quiet)."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return logging.WARNING


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure logging for a tmxheader run.

    Args:
        verbose: Show INFO messages (paths, per-map summaries)
        debug: Show DEBUG messages (layer counts, decoding details)
        quiet: Only show errors
        stream: Where to write log records (defaults to stdout)

    Returns:
        The 'tmxheader' logger
    """
    level = resolve_level(verbose, debug, quiet)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(stream or sys.stdout)
        ],
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger('tmxheader')
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the logger for a tmxheader module.

    Args:
        name: Module name, e.g. 'map_reader' (None for the package logger)
    """
    if name:
        return logging.getLogger(f'tmxheader.{name}')
    return logging.getLogger('tmxheader')
