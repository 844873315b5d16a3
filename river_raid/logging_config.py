"""
Logging Configuration
======================
Sets up the package logger.

The game owns the whole screen, so records never go to stdout: they are
written to a file when one is configured and dropped otherwise.
"""

import logging
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the 'river_raid' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to. Without it logging is silent.
    """
    logger = logging.getLogger('river_raid')
    logger.setLevel(level)

    # Avoid duplicate records when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.info("Logging initialized.")
