"""
Logging Configuration

Root-level logging setup for the scripts that ship with the orbit visualizer.
The ``orbit_visualizer`` package never configures logging itself; its modules
log through ``logging.getLogger(__name__)`` (``orbit_visualizer.session`` and
``orbit_visualizer.explanation`` are the ones that emit records), and whoever
runs the package decides where those records go.

Usage (as in ``demo.py``):
    from logging_config import configure_logging, get_logger

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger = get_logger(__name__)
    logger.info("Perigee distance: 4.800 DU")

A host application with its own logging setup does not need this module.
"""

import logging
import sys
from typing import Optional

# Default logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Parameters
    ----------
    level : int
        Logging level (e.g., logging.DEBUG, logging.INFO)
    log_file : str, optional
        Path to log file. If None, logs only to console.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Parameters
    ----------
    name : str
        Name of the logger (typically __name__)

    Returns
    -------
    logging.Logger
        Logger instance
    """
    return logging.getLogger(name)
