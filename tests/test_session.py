"""Test host event wiring."""

import asyncio

from lyrics_romanizer.core.models import DisplayState, LyricDocument
from lyrics_romanizer.core.presentation import LyricsContainer
from lyrics_romanizer.core.session import RomanizationSession


class Host:
    """Minimal host: one lyrics view rebuilt per loaded document."""

    def __init__(self):
        self.container = None
        self.published = []

    def load(self, session, document):
        self.container = LyricsContainer.from_document(document)
        return asyncio.run(session.on_lyrics_loaded(document))


def make_session(host, router, settings):
    return RomanizationSession(
        settings=settings,
        container_provider=lambda: host.container,
        publish=host.published.append,
        router=router,
    )


def test_romanized_by_default(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)

    result = host.load(session, korean_document)

    assert host.published == [result]
    assert session.state is DisplayState.ROMANIZED
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_original_by_default(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings.with_overrides(romanize_by_default=False))

    host.load(session, korean_document)

    assert session.state is DisplayState.ORIGINAL
    assert host.container.visible_texts == ["안녕", "hello"]
    assert session.toggle() is DisplayState.ROMANIZED
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_toggle_round_trip(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)
    host.load(session, korean_document)

    assert session.toggle() is DisplayState.ORIGINAL
    assert host.container.visible_texts == ["안녕", "hello"]
    assert session.show(DisplayState.ROMANIZED)
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_track_change_reapplies_default(router, settings, korean_document, mixed_document):
    host = Host()
    session = make_session(host, router, settings)
    host.load(session, korean_document)
    session.toggle()

    asyncio.run(session.initialize_analyzer())
    host.load(session, mixed_document)

    assert session.state is DisplayState.ROMANIZED
    assert host.container.visible_texts == ["konnichiha", "annyeong", "ni hao", "hello"]
    assert len(host.published) == 2


def test_latin_lyrics_are_not_published(router, settings):
    host = Host()
    session = make_session(host, router, settings)

    result = host.load(session, LyricDocument("just english", track_id="en"))

    assert result.skipped
    assert host.published == []
    assert session.state is DisplayState.ORIGINAL
    assert host.container.visible_texts == ["just english"]


def test_reloading_same_lyrics_publishes_once(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)

    host.load(session, korean_document)
    host.load(session, korean_document)

    assert len(host.published) == 1
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_missing_lyrics(router, settings):
    host = Host()
    session = make_session(host, router, settings)
    assert asyncio.run(session.on_lyrics_loaded(None)) is None
    assert host.published == []


def test_initialize_analyzer_reports_failure(router_factory, settings):
    from lyrics_romanizer.core.analyzer import AnalyzerLoader

    async def broken():
        raise OSError("dictionary missing")

    router = router_factory()
    router.analyzer_loader = AnalyzerLoader(broken)
    session = RomanizationSession(settings=settings, router=router)

    assert asyncio.run(session.initialize_analyzer()) is False
    assert asyncio.run(session.initialize_analyzer()) is False


def test_late_container_gets_default_state(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)

    asyncio.run(session.on_lyrics_loaded(korean_document))
    assert session.state is DisplayState.ORIGINAL

    host.load(session, korean_document)

    assert session.state is DisplayState.ROMANIZED
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_container_ready_hook(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)
    asyncio.run(session.on_lyrics_loaded(korean_document))

    host.container = LyricsContainer.from_document(korean_document)

    assert session.on_container_ready()
    assert host.container.visible_texts == ["annyeong", "hello"]


def test_track_without_lyrics_drops_old_mapping(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)
    host.load(session, korean_document)

    empty = LyricDocument("", "[00:01.00] 안녕", track_id="other")
    host.container = LyricsContainer.from_document(empty)
    assert asyncio.run(session.on_lyrics_loaded(empty)) is None

    assert session.toggle() is DisplayState.ORIGINAL
    assert host.container.visible_texts == ["안녕"]


def test_reprocess_publishes_again(router, settings, korean_document):
    host = Host()
    session = make_session(host, router, settings)
    host.load(session, korean_document)

    result = asyncio.run(session.reprocess(korean_document))

    assert host.published[-1] is result
    assert len(host.published) == 2
    assert host.container.visible_texts == ["annyeong", "hello"]
