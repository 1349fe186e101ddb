"""Data models for lyrics romanization."""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class ScriptCategory(str, Enum):
    """Writing system (or combination) a piece of text belongs to."""

    LATIN = "latin"
    HAN = "han"
    JAPANESE = "japanese"
    KOREAN = "korean"
    LATIN_HAN = "latin+han"
    LATIN_JAPANESE = "latin+japanese"
    LATIN_KOREAN = "latin+korean"
    LATIN_MIXED_CJK = "latin+mixed_cjk"
    MIXED_CJK = "mixed_cjk"

    @property
    def is_composite(self) -> bool:
        return self in _COMPOSITE_CATEGORIES


_COMPOSITE_CATEGORIES = frozenset(
    {
        ScriptCategory.LATIN_HAN,
        ScriptCategory.LATIN_JAPANESE,
        ScriptCategory.LATIN_KOREAN,
        ScriptCategory.LATIN_MIXED_CJK,
        ScriptCategory.MIXED_CJK,
    }
)


class DisplayState(str, Enum):
    """Which representation of the lyrics is visible."""

    ORIGINAL = "original"
    ROMANIZED = "romanized"

    @property
    def other(self) -> "DisplayState":
        if self is DisplayState.ORIGINAL:
            return DisplayState.ROMANIZED
        return DisplayState.ORIGINAL


class ProcessingPhase(str, Enum):
    """Phases of a single processing pass."""

    IDLE = "idle"
    CLASSIFYING = "classifying"
    SKIPPED = "skipped"
    SEGMENTING = "segmenting"
    ROUTING = "routing"
    MERGING = "merging"
    DONE = "done"


@dataclass(frozen=True)
class ScriptRun:
    """A maximal substring of a line in one script category."""

    text: str
    category: ScriptCategory


@dataclass(frozen=True)
class Token:
    """A morphological token from the Japanese analyzer."""

    surface: str
    reading: str = ""

    @property
    def display(self) -> str:
        return self.reading or self.surface


@dataclass(frozen=True)
class LyricDocument:
    """Lyrics of one track: plain lines plus timestamped subtitle lines."""

    lyrics_text: str
    subtitle_text: str = ""
    track_id: Any = None

    @property
    def identity(self) -> Tuple[Any, str, str]:
        return (self.track_id, self.lyrics_text, self.subtitle_text)

    @property
    def lyric_lines(self):
        return self.lyrics_text.split("\n") if self.lyrics_text else []

    @property
    def subtitle_lines(self):
        return self.subtitle_text.split("\n") if self.subtitle_text else []


@dataclass(frozen=True)
class ProcessingResult:
    """Published outcome of a processing pass."""

    track_id: Any
    romanization_map: Mapping[str, str]
    document: LyricDocument
    skipped: bool = False

    def __post_init__(self):
        if not isinstance(self.romanization_map, MappingProxyType):
            object.__setattr__(
                self, "romanization_map", MappingProxyType(dict(self.romanization_map))
            )


_pass_ids = itertools.count(1)


@dataclass(eq=False)
class PassContext:
    """State carried through one processing pass.

    The processor compares contexts by identity to discard passes that were
    superseded by a newer document before they finished.
    """

    document: LyricDocument
    settings: Any
    phase: ProcessingPhase = ProcessingPhase.IDLE
    pass_id: int = field(default_factory=lambda: next(_pass_ids))
    error: Optional[BaseException] = None

    @property
    def track_id(self) -> Any:
        return self.document.track_id
