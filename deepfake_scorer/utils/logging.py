"""
Logging Module
===============

Logging setup shared by every module of the scoring engine:
    - Colored console output (colorlog)
    - Size-based file rotation
    - Structured JSON logging for production
    - Execution timing decorator

Example Usage:
    >>> from deepfake_scorer.utils.logging import setup_logging, get_logger
    >>> setup_logging(level="DEBUG", log_file="logs/scorer.log")
    >>> logger = get_logger(__name__)
    >>> logger.info("Scoring artifact")
"""

from __future__ import annotations

import logging
import sys
import time
import json
import functools
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional, Union

import colorlog


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FORMAT_NO_TIME = "%(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "white,bg_red",
}


# =============================================================================
# Custom Formatters
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    Logging formatter that outputs structured JSON.

    Example output:
        {"timestamp": "2024-01-15T10:30:00", "level": "INFO", "message": "..."}
    """

    STANDARD_FIELDS = {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "asctime", "taskName",
    }

    def __init__(
        self,
        include_extra: bool = True,
        timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%f",
    ) -> None:
        super().__init__()
        self.include_extra = include_extra
        self.timestamp_format = timestamp_format

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).strftime(
                self.timestamp_format
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            extras = {
                k: v for k, v in record.__dict__.items()
                if k not in self.STANDARD_FIELDS and not k.startswith("_")
            }
            if extras:
                log_data["extra"] = extras

        return json.dumps(log_data, default=str)


# =============================================================================
# Logger Setup Functions
# =============================================================================

def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False,
    colorize: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Set up the logging system.

    Configures the root logger with a console handler and, optionally, a
    rotating file handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file.
        json_format: Use JSON formatting (for production).
        colorize: Use colored console output.
        include_timestamp: Include timestamps in log messages.

    Example:
        >>> setup_logging(level="DEBUG", log_file="logs/scorer.log")
        >>> setup_logging(level="INFO", json_format=True)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    log_format = LOG_FORMAT if include_timestamp else LOG_FORMAT_NO_TIME
    date_format = DATE_FORMAT if include_timestamp else None

    # Logs go to stderr so CLI JSON on stdout stays parseable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    elif colorize:
        console_handler.setFormatter(
            colorlog.ColoredFormatter(
                "%(log_color)s" + log_format,
                datefmt=date_format,
                log_colors=LEVEL_COLORS,
            )
        )
    else:
        console_handler.setFormatter(logging.Formatter(log_format, date_format))

    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(level)

        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(log_format, date_format))

        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Scoring started")
    """
    return logging.getLogger(name)


# =============================================================================
# Logging Utilities
# =============================================================================

def log_execution_time(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    message: str = "Execution time: {elapsed:.3f}s",
) -> Callable:
    """
    Decorator that logs function execution time.

    Args:
        logger: Logger to use (defaults to function's module logger).
        level: Log level for timing messages.
        message: Message format (must include {elapsed}).

    Example:
        >>> @log_execution_time()
        ... def analyze(name, size):
        ...     ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or get_logger(func.__module__)

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                log.log(
                    logging.ERROR,
                    f"{func.__name__} failed after {elapsed:.3f}s: {e}"
                )
                raise
            elapsed = time.perf_counter() - start_time
            log.log(level, f"{func.__name__}: {message.format(elapsed=elapsed)}")
            return result

        return wrapper
    return decorator
