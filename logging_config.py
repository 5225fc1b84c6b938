"""
Centralized logging configuration for the result export tool.

Usage:
    from logging_config import setup_logging, level_for_verbosity

    # CLI: -v / -vv on top of the WARNING default
    setup_logging(level=level_for_verbosity(args.verbose))

    # Time a phase of an export
    with LogContext(logger, "Rendering", export_format="csv", sections=4):
        ...
"""

import logging
import sys
import os
from datetime import datetime
from typing import Optional


# Log format with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Verbosity flag count -> level name
VERBOSITY_LEVELS = {0: "WARNING", 1: "INFO"}

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("urllib3", "requests", "httpx", "gradio")


def level_for_verbosity(count: int) -> str:
    """Level name for a repeated -v flag (0 = WARNING, 1 = INFO, 2+ = DEBUG)."""
    return VERBOSITY_LEVELS.get(count, "DEBUG")


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Log lines go to stderr so that stdout stays free for command output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var LOG_LEVEL or INFO.
        log_file: Optional path to log file. If provided, logs will also be written to file.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class LogContext:
    """
    Context manager that logs the duration of one export phase.

    Extra keyword arguments are appended to the log lines as key=value pairs.

    Usage:
        with LogContext(logger, "Building sections", variant="survey"):
            model = builder.build()
    """

    def __init__(self, logger: logging.Logger, operation: str, **fields):
        self.logger = logger
        self.operation = operation
        self.fields = fields
        self.start_time = None

    def describe(self) -> str:
        if not self.fields:
            return self.operation
        details = ", ".join(f"{key}={value}" for key, value in self.fields.items())
        return f"{self.operation} ({details})"

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"Starting: {self.describe()}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is None:
            self.logger.debug(f"Completed: {self.describe()} in {elapsed:.3f}s")
        else:
            self.logger.error(f"Failed: {self.describe()} after {elapsed:.3f}s - {exc_val}")
        return False  # Don't suppress exceptions
