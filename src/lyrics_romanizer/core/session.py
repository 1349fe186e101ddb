"""Wires the processor and toggle controller to host events.

The host calls :meth:`RomanizationSession.on_lyrics_loaded` when a track's
lyrics arrive and :meth:`RomanizationSession.toggle` when the user presses the
romanize button. Mounting the button and locating the lyrics view stay with
the host; the session only asks ``container_provider`` for the container.
"""

from typing import Callable, Optional

from ..config import Settings
from ..exceptions import AnalyzerUnavailable
from ..utils.logging import apply_debug_setting, get_logger
from .analyzer import AnalyzerLoader
from .models import DisplayState, LyricDocument, ProcessingResult
from .presentation import LyricsContainer
from .processor import LyricsProcessor
from .romanization import load_kakasi_analyzer
from .router import RomanizationRouter
from .toggle import DisplayToggleController

logger = get_logger(__name__)


class RomanizationSession:
    """One romanizer instance per host process."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        container_provider: Callable[[], Optional[LyricsContainer]] = lambda: None,
        publish: Optional[Callable[[ProcessingResult], None]] = None,
        router: Optional[RomanizationRouter] = None,
    ):
        self.settings = settings or Settings()
        apply_debug_setting(self.settings.show_debug_log)
        self.publish = publish
        self.router = router or RomanizationRouter(
            AnalyzerLoader(load_kakasi_analyzer), self.settings
        )
        self.processor = LyricsProcessor(self.router, self.settings)
        self.controller = DisplayToggleController(
            mapping_provider=lambda: self.processor.romanization_map,
            container_provider=container_provider,
            settings=self.settings,
        )
        self._track_id = None
        self._last_result: Optional[ProcessingResult] = None
        # State the user (or romanize-by-default) asked for; may lag behind
        # the controller while the container is not mounted
        self._wanted_state = DisplayState.ORIGINAL

    @property
    def state(self) -> DisplayState:
        return self.controller.state

    async def initialize_analyzer(self) -> bool:
        """Explicitly (re)load the Japanese analyzer; False if it failed."""
        try:
            await self.router.analyzer_loader.initialize()
        except AnalyzerUnavailable as e:
            logger.warning(f"Japanese analyzer unavailable: {e}")
            return False
        return True

    async def on_lyrics_loaded(self, document: Optional[LyricDocument]) -> Optional[ProcessingResult]:
        """Process new lyrics and show them in the default state."""
        if document is not None and document.track_id != self._track_id:
            self._track_id = document.track_id
            self._last_result = None
            self._wanted_state = DisplayState.ORIGINAL
            self.controller.reset()

        result = await self.processor.process(document)
        if result is None or result is not self.processor.result:
            return result
        if result is self._last_result:
            # Same lyrics rendered again, possibly into a new container
            self.on_container_ready()
            return result
        self._last_result = result

        if self.publish and not result.skipped:
            self.publish(result)

        if not result.skipped:
            self._wanted_state = self.controller.default_state
        self.on_container_ready()
        return result

    async def reprocess(self, document: LyricDocument) -> Optional[ProcessingResult]:
        """Run a fresh pass for ``document`` even if it was already processed."""
        self.processor.invalidate()
        return await self.on_lyrics_loaded(document)

    def on_container_ready(self) -> bool:
        """Host hook for a (re)mounted lyrics container: show the wanted state."""
        if self._wanted_state is DisplayState.ORIGINAL:
            return False
        return self.controller.apply(self._wanted_state)

    def toggle(self) -> DisplayState:
        """Button handler: flip the displayed representation."""
        state = self.controller.toggle()
        self._wanted_state = state
        return state

    def show(self, state: DisplayState) -> bool:
        applied = self.controller.apply(state)
        if applied:
            self._wanted_state = state
        return applied
