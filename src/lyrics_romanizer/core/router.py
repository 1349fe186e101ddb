"""Route text to the romanizer for its script."""

import asyncio
import re
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..config import Settings
from ..exceptions import AnalyzerCallFailed, RomanizerError
from ..utils.logging import get_logger
from .analyzer import AnalyzerLoader
from .models import ScriptCategory, Token
from .romanization import chinese_syllables, romanize_korean
from .script_detection import contains_japanese
from .segmenter import segment

logger = get_logger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

BatchResult = Dict[int, Tuple[str, str]]


def join_tokens(tokens: List[Token]) -> str:
    """Join token readings with single spaces, dropping whitespace-only tokens."""
    return " ".join(
        token.display.strip()
        for token in tokens
        if token.surface.strip() and token.display.strip()
    )


def _collapse(text: str) -> str:
    return " ".join(text.split())


class RomanizationRouter:
    """Dispatches runs and line batches to script-specific transducers.

    Korean and Chinese transducers are plain callables and run inline. The
    Japanese analyzer is reached through an :class:`AnalyzerLoader`, which
    must be READY before a Japanese run or batch is routed.
    """

    def __init__(
        self,
        analyzer_loader: AnalyzerLoader,
        settings: Optional[Settings] = None,
        korean_transducer: Callable[[str], str] = romanize_korean,
        chinese_transducer: Callable[[str, bool], List[str]] = chinese_syllables,
    ):
        self.analyzer_loader = analyzer_loader
        self.settings = settings or Settings()
        self.korean_transducer = korean_transducer
        self.chinese_transducer = chinese_transducer

    # ------------------------------------------------------------------
    # Per-script helpers
    # ------------------------------------------------------------------

    async def _analyze(self, texts: Mapping[int, str]) -> Dict[int, List[Token]]:
        analyzer = self.analyzer_loader.get()
        style = self.settings.japanese_romaji_style
        try:
            return await asyncio.wait_for(
                analyzer.analyze(texts, style), timeout=self.settings.analyzer_timeout
            )
        except asyncio.TimeoutError as e:
            raise AnalyzerCallFailed(
                f"Japanese analyzer timed out after {self.settings.analyzer_timeout}s"
            ) from e
        except RomanizerError:
            raise
        except Exception as e:
            raise AnalyzerCallFailed(f"Japanese analyzer call failed: {e}") from e

    def _romanize_chinese(self, text: str) -> str:
        return " ".join(self.chinese_transducer(text, self.settings.chinese_tone_marks))

    # ------------------------------------------------------------------
    # Public routing operations
    # ------------------------------------------------------------------

    async def romanize_run(self, text: str, category: ScriptCategory) -> str:
        """Romanize a single run of one script category."""
        if category is ScriptCategory.JAPANESE:
            tokens = await self._analyze({0: _WHITESPACE_RE.sub("", text)})
            return join_tokens(tokens.get(0, []))
        if category is ScriptCategory.KOREAN:
            return self.korean_transducer(text)
        if category is ScriptCategory.HAN:
            return self._romanize_chinese(text)
        return text

    async def romanize_line(self, line: str, japanese_hint: Optional[bool] = None) -> str:
        """Romanize a mixed-script line run by run."""
        if japanese_hint is None:
            japanese_hint = contains_japanese(line)
        pieces = []
        for run in segment(line, japanese_hint):
            pieces.append(await self.romanize_run(run.text, run.category))
        return _collapse(" ".join(pieces))

    async def romanize_batch(
        self,
        lines_by_index: Mapping[int, str],
        category: ScriptCategory,
        japanese_hint: Optional[bool] = None,
    ) -> BatchResult:
        """
        Romanize a group of lines of one category.

        Args:
            lines_by_index: Original line text keyed by line index
            category: Category shared by every line in the group
            japanese_hint: Document-scope hint for composite lines; each
                line's own kana decides when None

        Returns:
            Mapping of line index to (original line, romanized line)
        """
        if not lines_by_index:
            return {}

        if category is ScriptCategory.JAPANESE:
            stripped = {
                index: _WHITESPACE_RE.sub("", line) for index, line in lines_by_index.items()
            }
            tokens_by_index = await self._analyze(stripped)
            results = {
                index: (line, join_tokens(tokens_by_index.get(index, [])))
                for index, line in lines_by_index.items()
            }
        elif category is ScriptCategory.KOREAN:
            results = {
                index: (line, self.korean_transducer(line))
                for index, line in lines_by_index.items()
            }
        elif category is ScriptCategory.HAN:
            results = {
                index: (line, self._romanize_chinese(line))
                for index, line in lines_by_index.items()
            }
        elif category.is_composite:
            results = {}
            for index, line in lines_by_index.items():
                results[index] = (line, await self.romanize_line(line, japanese_hint))
        else:
            results = {index: (line, line) for index, line in lines_by_index.items()}

        for index, (original, romanized) in results.items():
            logger.debug(f"[{category.value}] {index}: {original} -> {romanized}")
        return results
