"""In-memory presentation tree for displayed lyrics.

A :class:`LyricsContainer` holds ordered line nodes. A line node may own one
hidden child node (its *pair*) holding the text that is currently not shown,
tagged with which representation that text is.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..config import ROMANIZATION_SEPARATOR
from .lrc import split_timestamp
from .models import DisplayState, LyricDocument


@dataclass(eq=False)
class TextNode:
    """A text-bearing node; ``holds`` tags the text of a hidden pair node."""

    text: str
    hidden: bool = False
    holds: Optional[DisplayState] = None
    children: List["TextNode"] = field(default_factory=list)

    @property
    def pair(self) -> Optional["TextNode"]:
        for child in self.children:
            if child.hidden and child.holds is not None:
                return child
        return None

    @property
    def has_combined_text(self) -> bool:
        return ROMANIZATION_SEPARATOR in self.text

    def attach_pair(self, text: str, holds: DisplayState) -> "TextNode":
        node = TextNode(text=text, hidden=True, holds=holds)
        self.children.append(node)
        return node


@dataclass(eq=False)
class LyricsContainer:
    """Ordered line nodes of the lyrics view."""

    lines: List[TextNode] = field(default_factory=list)

    def __iter__(self) -> Iterator[TextNode]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def visible_texts(self) -> List[str]:
        return [line.text for line in self.lines]

    @classmethod
    def from_lines(cls, lines: List[str]) -> "LyricsContainer":
        return cls(lines=[TextNode(text=line) for line in lines])

    @classmethod
    def from_document(cls, document: LyricDocument, subtitles: bool = True) -> "LyricsContainer":
        """Build line nodes the way the host renders a document.

        Subtitle lines are shown without their timestamp token.
        """
        if subtitles and document.subtitle_text:
            texts = [split_timestamp(line)[1] for line in document.subtitle_lines]
        else:
            texts = document.lyric_lines
        return cls.from_lines([text for text in texts if text.strip()])
