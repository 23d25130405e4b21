"""
Logging setup for the ``actorlens`` logger tree.

Console output is colored by level. When ``log_file`` is set, a plain
file handler with call-site details is added next to it.
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

from actorlens.config.settings import Settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Wraps the level name in an ANSI color."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # Other handlers receive the same record object
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(settings: Settings, stream: TextIO | None = None) -> None:
    """
    Attach console (and optional file) handlers to the ``actorlens`` logger.

    Args:
        settings: Provides log_level and log_file
        stream: Console stream, stdout by default. ``serve`` passes stderr
                since stdout carries the MCP protocol.
    """
    level = logging.getLevelName(settings.log_level)
    logger = logging.getLogger("actorlens")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    console = logging.StreamHandler(stream or sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console)

    if settings.log_file:
        logger.addHandler(_file_handler(Path(settings.log_file), level))
        logger.debug(f"Logging to {settings.log_file} at {settings.log_level}")
    else:
        logger.debug(f"Logging at {settings.log_level}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``actorlens`` namespace; full module names pass through."""
    if name == "actorlens" or name.startswith("actorlens."):
        return logging.getLogger(name)
    return logging.getLogger(f"actorlens.{name}")
