"""Logging configuration for Lyrics Romanizer."""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    verbose: bool = False,
    show_debug_log: bool = False,
) -> logging.Logger:
    """Set up logging configuration.

    ``show_debug_log`` (the settings flag) forces DEBUG regardless of ``level``.
    """

    # Suppress noisy third-party library logs
    logging.getLogger("pykakasi").setLevel(logging.WARNING)

    # Create logger
    logger = logging.getLogger("lyrics_romanizer")
    logger.setLevel(logging.DEBUG if show_debug_log else getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    # Create formatter
    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "lyrics_romanizer") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)


def apply_debug_setting(show_debug_log: bool) -> None:
    """Switch the package logger between DEBUG and INFO from the settings flag."""
    logger = logging.getLogger("lyrics_romanizer")
    logger.setLevel(logging.DEBUG if show_debug_log else logging.INFO)
