"""
Logging Config
==============
Centralized logging for the baseline engine and its command-line entry point.

Defaults come from core/config.py:
    level   — LOG_LEVEL (via log_level())
    log_dir — LOG_DIR; empty means console only

Console output goes to stderr so it never mixes with the classification
report printed on stdout. Colors are only used when stderr is a terminal.
"""
import logging
import os
import sys
from datetime import datetime
from typing import Optional

from stress_baseline.core import config

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that tints each record by level."""

    reset = "\x1b[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",       # cyan
        logging.INFO: "\x1b[32m",        # green
        logging.WARNING: "\x1b[33m",     # yellow
        logging.ERROR: "\x1b[31m",       # red
        logging.CRITICAL: "\x1b[31;1m",  # bold red
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_color or not color:
            return message
        return f"{color}{message}{self.reset}"


def setup_logging(level: Optional[int] = None, log_dir: Optional[str] = None) -> None:
    """
    Install the console handler, plus a dated file handler when a log directory is set.

    Parameters
    ----------
    level : int, optional
        Logging level; defaults to config.log_level().
    log_dir : str, optional
        Directory for baseline_YYYYMMDD.log; defaults to config.LOG_DIR.
    """
    if level is None:
        level = config.log_level()
    if log_dir is None:
        log_dir = config.LOG_DIR

    root_logger = logging.getLogger()

    # Replace existing handlers so repeated setup never duplicates output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=sys.stderr.isatty()))
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"baseline_{datetime.now().strftime('%Y%m%d')}.log"),
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger("stress_baseline").setLevel(level)

    root_logger.debug("Logging initialized (console%s).", " + file" if log_dir else "")
