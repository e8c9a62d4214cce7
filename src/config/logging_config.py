# src/config/logging_config.py

"""Per-run logging for feed_catalog.

Every launch writes a ``logs/run_<timestamp>.log`` file holding the full
DEBUG stream of all ``feed_catalog.*`` loggers (fetch attempts, cache
hits, extraction counts). Only warnings and errors reach the console, on
stderr, so JSON written to stdout by the CLI stays clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "feed_catalog"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    console_level: int = logging.WARNING,
    logs_dir: Path | None = None,
) -> Path:
    """Attach the file and console handlers to the project logger.

    Args:
        console_level: Minimum level echoed to stderr.
        logs_dir: Override for :attr:`Settings.LOGS_DIR`.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    project_logger = logging.getLogger(ROOT_LOGGER_NAME)
    project_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, re-entrant CLI) keep the first handlers
    if project_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)
    project_logger.info(
        "%s %s logging to %s",
        Settings.APP_NAME,
        Settings.APP_VERSION,
        log_file,
    )
    return log_file
