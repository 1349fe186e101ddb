"""Core romanization pipeline."""

from .models import (
    DisplayState,
    LyricDocument,
    ProcessingPhase,
    ProcessingResult,
    ScriptCategory,
    ScriptRun,
    Token,
)
from .script_detection import classify, contains_japanese, needs_romanization
from .segmenter import segment
from .analyzer import AnalyzerLoader, AnalyzerState
from .router import RomanizationRouter
from .processor import LyricsProcessor
from .presentation import LyricsContainer, TextNode
from .toggle import DisplayToggleController
from .session import RomanizationSession

__all__ = [
    "DisplayState",
    "LyricDocument",
    "ProcessingPhase",
    "ProcessingResult",
    "ScriptCategory",
    "ScriptRun",
    "Token",
    "classify",
    "contains_japanese",
    "needs_romanization",
    "segment",
    "AnalyzerLoader",
    "AnalyzerState",
    "RomanizationRouter",
    "LyricsProcessor",
    "LyricsContainer",
    "TextNode",
    "DisplayToggleController",
    "RomanizationSession",
]
