"""
Logging utilities for methodhooks
"""

import logging
import os
import sys


def get_logger(name: str = "methodhooks") -> logging.Logger:
    """
    Get logger instance

    The level defaults to INFO and can be changed through the
    METHODHOOKS_LOG_LEVEL environment variable (e.g. DEBUG).

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Create console handler
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)

        # Add handler to logger
        logger.addHandler(handler)
        level_name = os.getenv("METHODHOOKS_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))

    return logger
