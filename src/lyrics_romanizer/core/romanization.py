"""Script-specific romanizers backing the router.

Korean and Chinese conversions are synchronous, table-driven and never fail
outward: on a library error the text is returned unchanged. The Japanese
analyzer is the expensive capability; it is built once, off the event loop,
and called with whole batches of lines.
"""

import asyncio
from typing import Dict, List, Mapping

from korean_romanizer.romanizer import Romanizer
from pykakasi import kakasi
from pypinyin import Style, pinyin

from ..utils.logging import get_logger
from .models import Token

logger = get_logger(__name__)

# pykakasi result keys per romaji style; pykakasi has no Nippon-shiki output,
# Kunrei-shiki is its closest system
JAPANESE_STYLE_KEYS = {
    "hepburn": "hepburn",
    "passport": "passport",
    "nippon": "kunrei",
}


# ----------------------
# Korean
# ----------------------
def romanize_korean(text: str) -> str:
    """Romanize Korean text using korean_romanizer."""
    try:
        return Romanizer(text).romanize()
    except Exception as e:
        logger.debug(f"Korean romanization failed for {text!r}: {e}")
        return text


# ----------------------
# Chinese
# ----------------------
def chinese_syllables(text: str, tone_marks: bool = False) -> List[str]:
    """Convert Chinese text to pinyin syllables, first reading of each character."""
    style = Style.TONE if tone_marks else Style.NORMAL
    try:
        return [item[0] for item in pinyin(text, style=style, heteronym=False) if item]
    except Exception as e:
        logger.debug(f"Chinese romanization failed for {text!r}: {e}")
        return [text]


# ----------------------
# Japanese
# ----------------------
class KakasiAnalyzer:
    """Japanese analyzer producing (surface, reading) tokens with pykakasi."""

    def __init__(self):
        self._converter = kakasi()

    def tokenize(self, text: str, style: str = "hepburn") -> List[Token]:
        """Split ``text`` into tokens whose reading is in the given romaji style."""
        key = JAPANESE_STYLE_KEYS[style]
        return [
            Token(surface=item["orig"], reading=item.get(key) or "")
            for item in self._converter.convert(text)
        ]

    def _tokenize_all(self, texts: Mapping[int, str], style: str) -> Dict[int, List[Token]]:
        return {index: self.tokenize(text, style) for index, text in texts.items()}

    async def analyze(self, texts: Mapping[int, str], style: str = "hepburn") -> Dict[int, List[Token]]:
        """Analyze a batch of lines keyed by line index in one worker call."""
        return await asyncio.to_thread(self._tokenize_all, dict(texts), style)


async def load_kakasi_analyzer() -> KakasiAnalyzer:
    """Build the pykakasi analyzer without blocking the event loop."""
    logger.debug("Loading Japanese analyzer dictionaries")
    return await asyncio.to_thread(KakasiAnalyzer)
