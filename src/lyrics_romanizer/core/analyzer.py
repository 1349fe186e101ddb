"""Single-flight initialization of the Japanese analyzer.

The analyzer is loaded at most once per process. Concurrent callers share the
in-flight attempt; a failed attempt leaves the loader in FAILED so the next
explicit call starts a fresh one.
"""

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from ..exceptions import AnalyzerUnavailable
from ..utils.logging import get_logger

logger = get_logger(__name__)


class AnalyzerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class AnalyzerLoader:
    """Owns the lifecycle of an analyzer built by an async factory.

    The analyzer itself is any object with
    ``async analyze(texts: Mapping[int, str], style: str) -> Dict[int, List[Token]]``.
    """

    def __init__(self, factory: Callable[[], Awaitable[Any]]):
        self._factory = factory
        self._state = AnalyzerState.UNINITIALIZED
        self._analyzer: Optional[Any] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def state(self) -> AnalyzerState:
        return self._state

    def get(self) -> Any:
        """Return the loaded analyzer or raise AnalyzerUnavailable."""
        if self._state is not AnalyzerState.READY:
            raise AnalyzerUnavailable(f"Japanese analyzer is {self._state.value}")
        return self._analyzer

    async def initialize(self) -> Any:
        """Load the analyzer, joining an attempt already in flight.

        Idempotent once READY. Raises AnalyzerUnavailable when loading fails.
        """
        if self._state is AnalyzerState.READY:
            return self._analyzer
        if self._pending is None:
            self._state = AnalyzerState.INITIALIZING
            self._pending = asyncio.ensure_future(self._load())
        return await asyncio.shield(self._pending)

    async def _load(self) -> Any:
        try:
            analyzer = await self._factory()
        except Exception as e:
            self._state = AnalyzerState.FAILED
            self._pending = None
            logger.warning(f"Japanese analyzer failed to initialize: {e}")
            raise AnalyzerUnavailable(f"Japanese analyzer failed to initialize: {e}") from e

        self._analyzer = analyzer
        self._state = AnalyzerState.READY
        self._pending = None
        logger.debug("Japanese analyzer ready")
        return analyzer
