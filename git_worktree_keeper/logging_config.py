"""Logging configuration for git-worktree-keeper"""
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from git_worktree_keeper.constants import LOG_DIR_NAME, LOG_FILE_NAME

PACKAGE_PREFIXES = ("git_worktree_keeper.", "services.")

DEBUG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when writing to a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",     # Cyan
        logging.INFO: "\033[32m",      # Green
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = False):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_color or not color:
            return text
        return text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def _console_handler(level: int, debug: bool, stream: TextIO) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(
        fmt=DEBUG_FORMAT if debug else CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
        use_color=stream.isatty(),
    ))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure the root logger for one command run.

    Warnings always reach stderr; ``verbose`` adds progress messages and
    ``debug`` adds git level detail plus a log file that is rewritten on
    every run.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DEBUG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    root_logger.addHandler(_console_handler(level, debug, sys.stderr))


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named without the package prefix."""
    for prefix in PACKAGE_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
