# logger_utils.py -  logging setup plus timing helpers for metrics

import logging
import os
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# file lines look like: [YYYY-MM-DD HH:MM:SS] INFO    | message
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "term_autocompleter"


def get_logger(name: str) -> logging.Logger:
    """Module loggers hang off the package logger so one call configures them all."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", path: Optional[str] = None, use_color: bool = True) -> logging.Logger:
    """
    Attach a console handler (rich) and, optionally, an append-only log file.
    Safe to call more than once: previous handlers installed here are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for h in list(logger.handlers):
        if getattr(h, "_term_autocompleter", False):
            logger.removeHandler(h)
            h.close()

    console = RichHandler(
        console=Console(stderr=True, no_color=not use_color),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    console._term_autocompleter = True
    logger.addHandler(console)

    if path:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        fh._term_autocompleter = True
        logger.addHandler(fh)

    logger.propagate = False
    return logger


class Log:
    """Timing and metric helpers shared by the service and the CLI."""

    _logger = get_logger("metrics")

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric line at DEBUG.
        Example: autocomplete done: 0.0004s
        """
        Log._logger.debug("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label, metrics=None):
        """
        Helper for measuring execution time of a code block.
        To use:
            with Log.time_block("register_time", metrics):
                do_some_work()
        The duration is logged and, when a Metrics instance is given, recorded under `label`.
        """
        return _Timer(label, metrics)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, label, metrics=None):
        self.label = label
        self.metrics = metrics
        self.start = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        """Record the duration even when the block raised; the exception still propagates."""
        dur = time.perf_counter() - self.start
        if self.metrics is not None:
            self.metrics.record(self.label, dur)
        Log.metric(f"{self.label} done", round(dur, 6), "s")
        return False
