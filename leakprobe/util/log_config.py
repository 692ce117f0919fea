"""
Logging configuration for the leak probe.

Diagnostics (fixture setup, I/O failures, cleanup warnings) go through these
loggers. The per-iteration RSS report is printed directly by the driver, so
the console format stays short enough to sit between report lines.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER = "leakprobe"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(threadName)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_file: Path) -> logging.FileHandler:
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def _is_console(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level for the logger and its console handler
        log_file: Optional file that also receives DEBUG records, with
            timestamps and the worker thread name
        stream: Where console records are written. Defaults to sys.stdout as
            it is at call time, so diagnostics interleave in order with the
            RSS report. Pass sys.stderr to keep stdout to the report alone.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-importing a module must not stack a second console handler
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file))

    logger.propagate = False

    return logger


def _package_loggers() -> list[logging.Logger]:
    return [
        existing
        for name, existing in logging.root.manager.loggerDict.items()
        if name.startswith(PACKAGE_LOGGER) and isinstance(existing, logging.Logger)
    ]


def configure_logging(level: Optional[int] = None, log_file: Optional[Path] = None) -> None:
    """
    Reconfigure every leakprobe logger created so far.

    Module loggers are built at import time with INFO and no file, so the CLI
    calls this once its flags are parsed.

    Args:
        level: New level for the console handlers (and the loggers themselves)
        log_file: File to attach to each logger; one handler is shared and
            records everything down to DEBUG whatever the console level
    """
    shared_file = _file_handler(log_file) if log_file else None
    logger_level = logging.DEBUG if shared_file else level

    for existing in _package_loggers():
        if logger_level is not None:
            existing.setLevel(logger_level)
        if level is not None:
            for handler in existing.handlers:
                if _is_console(handler):
                    handler.setLevel(level)
        if shared_file:
            existing.addHandler(shared_file)
