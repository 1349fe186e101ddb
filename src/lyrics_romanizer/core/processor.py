"""Lyrics processing pass: classify, batch, route, merge, publish.

A pass moves through ``IDLE -> CLASSIFYING -> (SKIPPED | SEGMENTING ->
ROUTING -> MERGING -> DONE)``. Each pass carries its own
:class:`PassContext`; only the most recently started pass may publish, so a
slow pass for an old track can never overwrite the map of the current one.
"""

import asyncio
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..config import ROMANIZATION_SEPARATOR, Settings
from ..exceptions import RomanizerError
from ..utils.logging import get_logger
from ..utils.validation import is_processable
from .analyzer import AnalyzerLoader
from .lrc import split_timestamp, strip_timestamp
from .models import (
    LyricDocument,
    PassContext,
    ProcessingPhase,
    ProcessingResult,
    ScriptCategory,
)
from .router import RomanizationRouter
from .script_detection import classify, contains_japanese, is_han, needs_romanization

logger = get_logger(__name__)

# Categories romanized as whole lines; every composite goes through segmentation
_LINE_CATEGORIES = (ScriptCategory.JAPANESE, ScriptCategory.KOREAN, ScriptCategory.HAN)


def _routing_category(category: ScriptCategory) -> ScriptCategory:
    if category in _LINE_CATEGORIES:
        return category
    return ScriptCategory.MIXED_CJK


def collect_lines(document: LyricDocument) -> List[str]:
    """Unique trimmed line texts of a document, lyrics first, in order."""
    seen = set()
    lines: List[str] = []
    candidates = document.lyric_lines + [strip_timestamp(l) for l in document.subtitle_lines]
    for raw in candidates:
        text = raw.strip()
        if text and text not in seen:
            seen.add(text)
            lines.append(text)
    return lines


def group_lines(
    lines: List[str], document_hint: Optional[bool] = None
) -> Dict[ScriptCategory, Dict[int, str]]:
    """
    Group lines needing romanization into per-category batches.

    Args:
        lines: Line texts; the list index is the batch key
        document_hint: Japanese hint applied to every line, or None to use
            each line's own kana

    Returns:
        Routing category -> {line index: line text}, LATIN lines excluded
    """
    batches: Dict[ScriptCategory, Dict[int, str]] = {}
    for index, line in enumerate(lines):
        hint = contains_japanese(line) if document_hint is None else document_hint
        category = classify(line, japanese_context=hint)
        if category is ScriptCategory.LATIN:
            continue
        batches.setdefault(_routing_category(category), {})[index] = line
    return batches


def augment_document(document: LyricDocument, mapping: Mapping[str, str]) -> LyricDocument:
    """Append ``separator + romanization`` to every lyric and subtitle line in the map."""
    lyric_lines = []
    for line in document.lyric_lines:
        romanized = mapping.get(line.strip())
        lyric_lines.append(line + ROMANIZATION_SEPARATOR + romanized if romanized is not None else line)

    subtitle_lines = []
    for line in document.subtitle_lines:
        _, text = split_timestamp(line)
        romanized = mapping.get(text.strip())
        subtitle_lines.append(line + ROMANIZATION_SEPARATOR + romanized if romanized is not None else line)

    return LyricDocument(
        lyrics_text="\n".join(lyric_lines),
        subtitle_text="\n".join(subtitle_lines),
        track_id=document.track_id,
    )


class LyricsProcessor:
    """Turns lyric documents into romanization maps and augmented documents."""

    def __init__(
        self,
        router: RomanizationRouter,
        settings: Optional[Settings] = None,
        on_publish: Optional[Callable[[ProcessingResult], None]] = None,
    ):
        self.router = router
        self.settings = settings or router.settings
        self.on_publish = on_publish
        self._map: Dict[str, str] = {}
        self._result: Optional[ProcessingResult] = None
        self._processed_identity = None
        self._target: Optional[PassContext] = None

    @property
    def analyzer_loader(self) -> AnalyzerLoader:
        return self.router.analyzer_loader

    @property
    def romanization_map(self) -> Mapping[str, str]:
        return MappingProxyType(self._map)

    @property
    def result(self) -> Optional[ProcessingResult]:
        return self._result

    @property
    def phase(self) -> ProcessingPhase:
        return self._target.phase if self._target else ProcessingPhase.IDLE

    @property
    def current_track_id(self):
        return self._target.track_id if self._target else None

    def invalidate(self) -> None:
        """Forget the published result so the next call reprocesses."""
        self._result = None
        self._processed_identity = None

    def reset(self) -> None:
        """Return to IDLE and clear the map (track change)."""
        self._target = None
        self._result = None
        self._processed_identity = None
        self._map = {}

    async def process(self, document: Optional[LyricDocument]) -> Optional[ProcessingResult]:
        """
        Run one processing pass for ``document``.

        Returns:
            The published result, the existing result when the document was
            already processed, or None when the document is invalid, the pass
            failed, or a newer document superseded it.
        """
        # A new track invalidates the old map even when its own lyrics are unusable
        if document is not None and document.track_id != self.current_track_id:
            self.reset()

        if not is_processable(document):
            return None

        if self._result is not None and self._processed_identity == document.identity:
            logger.debug(f"Track {document.track_id!r} already processed, skipping")
            return self._result

        ctx = PassContext(document=document, settings=self.settings)
        self._target = ctx

        try:
            ctx.phase = ProcessingPhase.CLASSIFYING
            if not self._document_needs_romanization(document):
                ctx.phase = ProcessingPhase.SKIPPED
                logger.info(f"No romanization needed for track {document.track_id!r}")
                return self._publish(ctx, {}, document, skipped=True)

            ctx.phase = ProcessingPhase.SEGMENTING
            lines = collect_lines(document)
            document_hint = self._document_hint(document)
            batches = group_lines(lines, document_hint)

            ctx.phase = ProcessingPhase.ROUTING
            if self._may_need_analyzer(batches, document_hint):
                await self.analyzer_loader.initialize()
            results = await asyncio.gather(
                *(
                    self.router.romanize_batch(batch, category, document_hint)
                    for category, batch in batches.items()
                )
            )

            if ctx is not self._target:
                logger.debug(f"Discarding stale pass {ctx.pass_id} for track {ctx.track_id!r}")
                return None

            ctx.phase = ProcessingPhase.MERGING
            merged: List[Tuple[int, Tuple[str, str]]] = sorted(
                item for batch_result in results for item in batch_result.items()
            )
            mapping: Dict[str, str] = {}
            for _, (original, romanized) in merged:
                mapping[original.strip()] = romanized
            augmented = augment_document(document, mapping)
        except RomanizerError as e:
            self._abort(ctx, e)
            logger.warning(f"Romanization unavailable for track {ctx.track_id!r}: {e}")
            return None
        except Exception as e:
            self._abort(ctx, e)
            logger.error(f"Error processing lyrics for track {ctx.track_id!r}: {e}")
            return None

        ctx.phase = ProcessingPhase.DONE
        logger.info(f"Lyrics processed: {len(mapping)} romanized lines")
        return self._publish(ctx, mapping, augmented)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _document_needs_romanization(self, document: LyricDocument) -> bool:
        return needs_romanization("\n".join(collect_lines(document)))

    def _document_hint(self, document: LyricDocument) -> Optional[bool]:
        if self.settings.japanese_hint_scope == "document":
            return contains_japanese("\n".join(collect_lines(document)))
        return None

    @staticmethod
    def _may_need_analyzer(
        batches: Mapping[ScriptCategory, Mapping[int, str]], document_hint: Optional[bool]
    ) -> bool:
        if ScriptCategory.JAPANESE in batches:
            return True
        return any(
            contains_japanese(line) or (document_hint and is_han(line))
            for line in batches.get(ScriptCategory.MIXED_CJK, {}).values()
        )

    def _abort(self, ctx: PassContext, error: Exception) -> None:
        ctx.error = error
        if ctx is self._target:
            self._map = {}
            self._result = None
            self._processed_identity = None
            ctx.phase = ProcessingPhase.IDLE

    def _publish(
        self,
        ctx: PassContext,
        mapping: Dict[str, str],
        document: LyricDocument,
        skipped: bool = False,
    ) -> ProcessingResult:
        self._map = dict(mapping)
        self._processed_identity = ctx.document.identity
        self._result = ProcessingResult(
            track_id=ctx.track_id,
            romanization_map=mapping,
            document=document,
            skipped=skipped,
        )
        if self.on_publish:
            self.on_publish(self._result)
        return self._result
