"""Logging setup for applications using sunk.

The library itself only creates loggers under the ``sunk`` namespace; call
setup_logging() from application code to get coloured console output for
them and an optional log file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import colorlog

LOGGER_NAME = "sunk"

LOG_COLORS = {
    'DEBUG': 'bold_blue',
    'INFO': 'bold_green',
    'WARNING': 'bold_yellow',
    'ERROR': 'bold_red',
    'CRITICAL': 'bold_purple',
}


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Attach console and file handlers to the ``sunk`` logger.

    Arguments left as None are read from the environment:
        SUNK_LOG_LEVEL: Log level (default INFO)
        SUNK_LOG_FILE: Path of a rotating log file (optional)
        LOG_FILE_MAX_BYTES: Rotation size (default 10 MB)
        LOG_FILE_BACKUP_COUNT: Rotated files kept (default 5)

    Records handled here stop propagating, so an application that also
    configures the root logger does not see each line twice. Calling this
    again only updates the level.

    Returns:
        The configured ``sunk`` logger
    """
    level = (level or os.getenv('SUNK_LOG_LEVEL', 'INFO')).upper()
    log_file = log_file or os.getenv('SUNK_LOG_FILE')

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        colorlog.ColoredFormatter("%(log_color)s%(levelname)s:%(name)s:%(message)s", log_colors=LOG_COLORS)
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=int(os.getenv('LOG_FILE_MAX_BYTES', '10485760')),  # 10 MB
            backupCount=int(os.getenv('LOG_FILE_BACKUP_COUNT', '5')),
        )
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s - (%(filename)s:%(lineno)d)')
        )
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
