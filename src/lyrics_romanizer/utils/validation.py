"""Validation utilities."""

import logging
from pathlib import Path

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def validate_document(document) -> None:
    """Validate that a lyric document carries text worth processing."""
    if document is None:
        raise ValidationError("Lyric document cannot be empty")
    if not (document.lyrics_text or "").strip():
        raise ValidationError(f"Lyric document for track {document.track_id!r} has no lyrics")


def is_processable(document) -> bool:
    """Return True when ``document`` passes :func:`validate_document`."""
    try:
        validate_document(document)
    except ValidationError as e:
        logger.debug(f"Skipping document: {e}")
        return False
    return True


def validate_input_path(path: str) -> Path:
    """Validate that a lyrics input file exists and is readable text."""
    input_path = Path(path)
    if not input_path.is_file():
        raise ValidationError(f"Lyrics file not found: {path}")
    if input_path.suffix.lower() not in [".lrc", ".txt"]:
        raise ValidationError("Lyrics file must have .lrc or .txt extension")
    return input_path
