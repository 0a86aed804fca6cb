"""Logging setup for the viewer.

Log records go to stderr so the tables the viewer prints on stdout stay
clean to pipe or redirect. A timestamped log file is added on request.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'fantasytier'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# Chatty below WARNING on every subgraph and IPFS request
NOISY_LOGGERS = ('urllib3',)


def log_file_path(log_dir: Path, started: Optional[datetime] = None) -> Path:
    """Path of the log file for a viewer run started at `started` (default: now)."""
    started = started or datetime.now()
    return log_dir / f'fantasytier_{started.strftime("%Y%m%d_%H%M%S")}.log'


def setup_logging(level: int = logging.INFO, log_dir: Optional[Path | str] = None) -> logging.Logger:
    """
    Configure the 'fantasytier' logger for one viewer run.

    Calling it again replaces the handlers from the previous call, so
    repeated runs in one process never log twice.

    Args:
        level: Threshold for the console (and file) handlers
        log_dir: If given, also write DEBUG-level detail to a timestamped
            file in this directory (created if missing)

    Returns:
        The configured 'fantasytier' logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path(log_dir), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
