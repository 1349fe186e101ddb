"""Configuration settings for Lyrics Romanizer."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from .exceptions import ConfigError

# Japanese romaji styles understood by the analyzer
ROMAJI_STYLES = ("hepburn", "passport", "nippon")

# Scope of the "contains Japanese" hint used to read Han characters as Kanji
HINT_SCOPES = ("line", "document")


def _parse_timeout(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"Invalid analyzer timeout: {value!r}")


# Defaults (can be overridden via environment variables)
ROMANIZE_BY_DEFAULT = os.getenv("LYRICS_ROMANIZER_ROMANIZE_BY_DEFAULT", "1") == "1"
SHOW_DEBUG_LOG = os.getenv("LYRICS_ROMANIZER_SHOW_DEBUG", "0") == "1"
JAPANESE_ROMAJI_STYLE = os.getenv("LYRICS_ROMANIZER_ROMAJI_STYLE", "hepburn").lower()
CHINESE_TONE_MARKS = os.getenv("LYRICS_ROMANIZER_TONE_MARKS", "0") == "1"
JAPANESE_HINT_SCOPE = os.getenv("LYRICS_ROMANIZER_HINT_SCOPE", "line").lower()
ANALYZER_TIMEOUT = _parse_timeout(os.getenv("LYRICS_ROMANIZER_ANALYZER_TIMEOUT", "30.0"))

# Private-use codepoint placed between an original line and its romanization
ROMANIZATION_SEPARATOR = "\ue000"


@dataclass(frozen=True)
class Settings:
    """Settings read by the processor, router and toggle controller."""

    romanize_by_default: bool = ROMANIZE_BY_DEFAULT
    show_debug_log: bool = SHOW_DEBUG_LOG
    japanese_romaji_style: str = JAPANESE_ROMAJI_STYLE
    chinese_tone_marks: bool = CHINESE_TONE_MARKS
    japanese_hint_scope: str = JAPANESE_HINT_SCOPE
    analyzer_timeout: float = ANALYZER_TIMEOUT

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        settings = cls(
            romanize_by_default=os.getenv("LYRICS_ROMANIZER_ROMANIZE_BY_DEFAULT", "1") == "1",
            show_debug_log=os.getenv("LYRICS_ROMANIZER_SHOW_DEBUG", "0") == "1",
            japanese_romaji_style=os.getenv("LYRICS_ROMANIZER_ROMAJI_STYLE", "hepburn").lower(),
            chinese_tone_marks=os.getenv("LYRICS_ROMANIZER_TONE_MARKS", "0") == "1",
            japanese_hint_scope=os.getenv("LYRICS_ROMANIZER_HINT_SCOPE", "line").lower(),
            analyzer_timeout=_parse_timeout(
                os.getenv("LYRICS_ROMANIZER_ANALYZER_TIMEOUT", "30.0")
            ),
        )
        validate_settings(settings)
        return settings

    def with_overrides(self, **changes) -> "Settings":
        """Return a validated copy with the given fields replaced.

        ``None`` values are ignored so CLI options can be passed straight through.
        """
        updated = replace(self, **{k: v for k, v in changes.items() if v is not None})
        validate_settings(updated)
        return updated


def validate_settings(settings: Optional[Settings] = None) -> None:
    """Validate configuration values."""
    settings = settings or Settings()

    if settings.japanese_romaji_style not in ROMAJI_STYLES:
        raise ConfigError(
            f"Invalid romaji style '{settings.japanese_romaji_style}', "
            f"expected one of {', '.join(ROMAJI_STYLES)}"
        )

    if settings.japanese_hint_scope not in HINT_SCOPES:
        raise ConfigError(
            f"Invalid Japanese hint scope '{settings.japanese_hint_scope}', "
            f"expected one of {', '.join(HINT_SCOPES)}"
        )

    if settings.analyzer_timeout <= 0:
        raise ConfigError("Analyzer timeout must be positive")


# Validate config on import
validate_settings()
