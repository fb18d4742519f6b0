"""
Logging configuration for Complexity Insight.

Log records go to stderr through a rich handler so that report output on
stdout (tables or JSON) stays clean for piping.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "complexity_insight"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the complexity_insight logger.

    Handlers are replaced on every call, so the CLI can be invoked repeatedly
    in one process (tests, notebooks) without duplicating output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to

    Returns:
        Configured logger instance for complexity_insight
    """
    level = _level_for(verbose, quiet)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=True,
        show_time=verbose,
        show_path=verbose,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the complexity_insight namespace.

    Args:
        name: Module name (e.g., 'complexity_insight.engine.context').
              Names outside the namespace are prefixed with it.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
