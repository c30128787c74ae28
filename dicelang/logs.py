# -*- coding: utf-8 -*-
"""Logging setup for hosts and the command line."""
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level:<8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging(level="WARNING", log_path=None, rotation="10 MB", retention="7 days"):
    """route dicelang's logs to stderr, and to a rotating daily file under log_path if given"""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT, colorize=True)

    if log_path:
        log_path = Path(log_path)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "dicelang_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    logger.enable("dicelang")
