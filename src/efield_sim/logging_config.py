# MIT License (see LICENSE)
"""
Logging configuration.

The library only creates module loggers under the ``efield_sim`` namespace;
applications (examples, benchmarks, front ends) call setup_logging() once.
"""
from __future__ import annotations
import logging
import os
import sys

ENV_LOG_LEVEL = "EFIELD_SIM_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    """Log level named by EFIELD_SIM_LOG_LEVEL (e.g. "DEBUG"), else default."""
    name = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'efield_sim' logger.

    Args:
        level: Logging level; defaults to level_from_env().
        log_file: Optional path to also write logs to.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger("efield_sim")
    logger.setLevel(level)

    # Avoid duplicate handlers when called again
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
