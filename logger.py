"""Logging configuration for Saldo.

Logs go to a dated file in the configured log directory and to the console.
"""

import logging
import sys
from datetime import date

from config import Config

LOGGER_NAME = "saldo"

_DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    # File handler - one file per day: saldo-{date}.log
    log_file_path = config.log_dir / f"saldo-{date.today().isoformat()}.log"
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    # Console handler on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The saldo logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
