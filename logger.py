"""Logging configuration for the money tracker.

Logs go to the console, and to a dated file when a log directory is set.
"""

import logging
from datetime import date

from config import Settings

LOGGER_NAME = "money_tracker"


def setup_logging(settings: Settings) -> logging.Logger:
    """Set up application logging.

    Args:
        settings: Application settings containing log level and directory.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)

    # Streamlit re-runs the page script, so this can be called many times
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(console_handler)

    if settings.log_dir:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = settings.log_dir / f"money-tracker-{date.today().isoformat()}.log"
        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(settings.log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
