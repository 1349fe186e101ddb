"""Switch displayed lyrics between original and romanized text.

Neither representation is ever deleted: the inactive text lives in a hidden
pair node under the visible line node and the two are swapped on demand.
"""

from typing import Callable, Mapping, Optional

from ..config import ROMANIZATION_SEPARATOR, Settings
from ..exceptions import PresentationNotFound
from ..utils.logging import get_logger
from .models import DisplayState
from .presentation import LyricsContainer, TextNode

logger = get_logger(__name__)


class DisplayToggleController:
    """Applies a DisplayState to the lyrics container and tracks the current one."""

    def __init__(
        self,
        mapping_provider: Callable[[], Mapping[str, str]],
        container_provider: Callable[[], Optional[LyricsContainer]],
        settings: Optional[Settings] = None,
    ):
        self.mapping_provider = mapping_provider
        self.container_provider = container_provider
        self.settings = settings or Settings()
        self.state = DisplayState.ORIGINAL

    @property
    def default_state(self) -> DisplayState:
        if self.settings.romanize_by_default:
            return DisplayState.ROMANIZED
        return DisplayState.ORIGINAL

    def reset(self, state: DisplayState = DisplayState.ORIGINAL) -> None:
        """Forget the applied state, e.g. when new lyrics replace the container."""
        self.state = state

    def toggle(self) -> DisplayState:
        """Flip between original and romanized text."""
        self.apply(self.state.other)
        return self.state

    def apply(self, target: DisplayState) -> bool:
        """
        Show the ``target`` representation on every paired line node.

        Returns:
            True if the container was updated, False when there is no
            mapping or no container
        """
        mapping = self.mapping_provider() or {}
        if not mapping:
            logger.info("No romanized lyrics available, nothing to toggle")
            return False

        try:
            container = self._require_container()
        except PresentationNotFound as e:
            logger.info(str(e))
            return False

        changed = 0
        for node in container:
            if self._apply_to_node(node, target, mapping):
                changed += 1

        self.state = target
        logger.debug(f"Display state -> {target.value} ({changed} lines swapped)")
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_container(self) -> LyricsContainer:
        container = self.container_provider()
        if container is None:
            raise PresentationNotFound("Lyrics container not found")
        return container

    def _apply_to_node(
        self, node: TextNode, target: DisplayState, mapping: Mapping[str, str]
    ) -> bool:
        pair = node.pair
        if pair is None:
            pair = self._split_node(node, target, mapping)
            return pair is not None

        if pair.holds is target:
            node.text, pair.text = pair.text, node.text
            pair.holds = target.other
            return True
        return False

    def _split_node(
        self, node: TextNode, target: DisplayState, mapping: Mapping[str, str]
    ) -> Optional[TextNode]:
        """Create the hidden pair node for a line seen for the first time."""
        if node.has_combined_text:
            original, romanized = node.text.split(ROMANIZATION_SEPARATOR, 1)
        else:
            romanized = mapping.get(node.text.strip())
            if romanized is None:
                return None
            original = node.text

        if target is DisplayState.ROMANIZED:
            node.text = romanized
            return node.attach_pair(original, DisplayState.ORIGINAL)
        node.text = original
        return node.attach_pair(romanized, DisplayState.ROMANIZED)
