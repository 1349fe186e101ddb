"""Test configuration and fixtures.

Provides reusable fixtures for:
- Fake Japanese analyzer and Korean/Chinese transducers
- Analyzer loaders, routers and processors wired to the fakes
- Sample lyric documents and presentation containers
"""

import asyncio
import os
from typing import Dict, List, Mapping, Optional

import pytest

from lyrics_romanizer.config import Settings
from lyrics_romanizer.core.analyzer import AnalyzerLoader
from lyrics_romanizer.core.models import LyricDocument, Token
from lyrics_romanizer.core.processor import LyricsProcessor
from lyrics_romanizer.core.router import RomanizationRouter


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Fake capabilities
# =============================================================================

JAPANESE_READINGS = {
    "こんにちは": [Token("こんにちは", "konnichiha")],
    "今日はいい天気": [Token("今日", "kyou"), Token("は", "ha"), Token("いい", "ii"), Token("天気", "tenki")],
    "世界": [Token("世界", "sekai")],
    "愛してる": [Token("愛", "ai"), Token("して", "shite"), Token("る", "ru")],
}

KOREAN_READINGS = {
    "안녕": "annyeong",
    "사랑해": "saranghae",
}

CHINESE_READINGS = {
    "你好": ["ni", "hao"],
    "世界": ["shi", "jie"],
    "我爱你": ["wo", "ai", "ni"],
}


class FakeAnalyzer:
    """Records batches and answers from JAPANESE_READINGS."""

    def __init__(self, gate: Optional[asyncio.Event] = None, error: Optional[Exception] = None):
        self.calls: List[Dict[int, str]] = []
        self.styles: List[str] = []
        self.gate = gate
        self.error = error

    async def analyze(self, texts: Mapping[int, str], style: str = "hepburn") -> Dict[int, List[Token]]:
        self.calls.append(dict(texts))
        self.styles.append(style)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return {
            index: JAPANESE_READINGS.get(text, [Token(text, f"jp({text})")])
            for index, text in texts.items()
        }


def fake_korean(text: str) -> str:
    return KOREAN_READINGS.get(text, f"kr({text})")


def fake_chinese(text: str, tone_marks: bool = False) -> List[str]:
    syllables = CHINESE_READINGS.get(text, [f"zh({text})"])
    if tone_marks:
        return [s + "*" for s in syllables]
    return syllables


def make_loader(analyzer) -> AnalyzerLoader:
    async def factory():
        return analyzer

    return AnalyzerLoader(factory)


def make_router(analyzer=None, settings: Optional[Settings] = None) -> RomanizationRouter:
    return RomanizationRouter(
        make_loader(analyzer or FakeAnalyzer()),
        settings or Settings(),
        korean_transducer=fake_korean,
        chinese_transducer=fake_chinese,
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Default settings independent of the environment."""
    return Settings(
        romanize_by_default=True,
        show_debug_log=False,
        japanese_romaji_style="hepburn",
        chinese_tone_marks=False,
        japanese_hint_scope="line",
        analyzer_timeout=5.0,
    )


@pytest.fixture
def fake_analyzer():
    return FakeAnalyzer()


@pytest.fixture
def router(fake_analyzer, settings):
    return make_router(fake_analyzer, settings)


@pytest.fixture
def processor(router, settings):
    return LyricsProcessor(router, settings)


@pytest.fixture
def mixed_document():
    """One line per script plus a Latin line."""
    return LyricDocument(
        lyrics_text="こんにちは\n안녕\n你好\nhello",
        subtitle_text=(
            "[00:01.00] こんにちは\n"
            "[00:02.00] 안녕\n"
            "[00:03.00] 你好\n"
            "[00:04.00] hello"
        ),
        track_id="mixed",
    )


@pytest.fixture
def korean_document():
    return LyricDocument(
        lyrics_text="안녕\nhello",
        subtitle_text="[00:01.00] 안녕\n[00:02.00] hello",
        track_id="track-kr",
    )


@pytest.fixture
def lrc_japanese():
    """LRC with ID tags and repeated lines."""
    return """[ar:Artist]
[ti:Song]
[00:01.00] 今日はいい天気
[00:05.50] 愛してる
[00:09.00] I love you
[00:12.25] 愛してる
"""


@pytest.fixture
def analyzer_factory():
    """Build FakeAnalyzer instances (optionally gated or failing)."""
    return FakeAnalyzer


@pytest.fixture
def router_factory(settings):
    """Build routers wired to fake transducers."""

    def build(analyzer=None, router_settings: Optional[Settings] = None):
        return make_router(analyzer, router_settings or settings)

    return build


@pytest.fixture
def loader_factory():
    return make_loader
