"""Utility modules."""

from .logging import setup_logging, get_logger, apply_debug_setting
from .validation import (
    validate_document,
    is_processable,
    validate_input_path,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "apply_debug_setting",
    "validate_document",
    "is_processable",
    "validate_input_path",
]
