# file: utils.py

"""Utility functions for the host simulation."""

import logging

from config import LOG_FORMAT, LOG_DATE_FORMAT

def setup_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level and format."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )

def utilization_fraction(used, capacity) -> float:
    """Ratio of used to total capacity; a zero-capacity resource is never utilized."""
    return used / capacity if capacity > 0 else 0.0
