"""Logging configuration for mb-pass."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_path: Path, level: int = logging.INFO) -> None:
    """Attach a rotating file handler to the package logger.

    Runs once per process; later calls are no-ops. Secret values are never logged, only entry names.
    """
    logger = logging.getLogger("mb_pass")
    if logger.handlers:
        return

    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))

    logger.setLevel(level)
    logger.addHandler(handler)
