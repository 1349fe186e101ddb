"""Script detection for lyrics text.

Four membership predicates (Latin, Han, Japanese kana, Hangul) are evaluated
independently and then resolved into a single :class:`ScriptCategory`.
Digits, punctuation and whitespace belong to none of them.
"""

from .lrc import strip_timestamp
from .models import ScriptCategory

# ----------------------
# Unicode ranges for script detection
# ----------------------
KOREAN_RANGES = [(0x1100, 0x11FF), (0x3130, 0x318F), (0xAC00, 0xD7AF), (0xA960, 0xA97F), (0xD7B0, 0xD7FF)]
KANA_RANGES = [(0x3040, 0x309F), (0x30A0, 0x30FF), (0x31F0, 0x31FF), (0xFF66, 0xFF9F)]
HAN_RANGES = [(0x3005, 0x3007), (0x3400, 0x4DBF), (0x4E00, 0x9FFF), (0xF900, 0xFAFF), (0x20000, 0x2CEAF)]
LATIN_RANGES = [(0x0041, 0x005A), (0x0061, 0x007A), (0x00C0, 0x00D6), (0x00D8, 0x00F6), (0x00F8, 0x024F), (0x1E00, 0x1EFF)]

# Punctuation marks inside the kana blocks that carry no reading
_KANA_NEUTRAL = {0x3099, 0x309A, 0x30A0, 0x30FB}


def _in_ranges(code: int, ranges) -> bool:
    return any(start <= code <= end for start, end in ranges)


def is_latin(text: str) -> bool:
    return any(_in_ranges(ord(c), LATIN_RANGES) for c in text)


def is_han(text: str) -> bool:
    return any(_in_ranges(ord(c), HAN_RANGES) for c in text)


def is_kana(text: str) -> bool:
    return any(
        _in_ranges(ord(c), KANA_RANGES) and ord(c) not in _KANA_NEUTRAL for c in text
    )


def is_hangul(text: str) -> bool:
    return any(_in_ranges(ord(c), KOREAN_RANGES) for c in text)


def contains_japanese(text: str) -> bool:
    """Whether ``text`` contains kana, i.e. Han characters in it read as Kanji."""
    return is_kana(text)


def classify(text: str, japanese_context: bool = False) -> ScriptCategory:
    """
    Classify text into a script category.

    Args:
        text: A line, substring or single character
        japanese_context: Treat Han characters as Japanese Kanji

    Returns:
        The resolved ScriptCategory; LATIN when no script is detected
    """
    latin = is_latin(text)
    han = is_han(text)
    kana = is_kana(text)
    hangul = is_hangul(text)

    if japanese_context and han:
        kana, han = True, False

    cjk = [
        category
        for present, category in (
            (han, ScriptCategory.HAN),
            (kana, ScriptCategory.JAPANESE),
            (hangul, ScriptCategory.KOREAN),
        )
        if present
    ]

    if not latin:
        if len(cjk) == 1:
            return cjk[0]
        if len(cjk) > 1:
            return ScriptCategory.MIXED_CJK
        return ScriptCategory.LATIN

    if not cjk:
        return ScriptCategory.LATIN
    if len(cjk) > 1:
        return ScriptCategory.LATIN_MIXED_CJK
    return {
        ScriptCategory.HAN: ScriptCategory.LATIN_HAN,
        ScriptCategory.JAPANESE: ScriptCategory.LATIN_JAPANESE,
        ScriptCategory.KOREAN: ScriptCategory.LATIN_KOREAN,
    }[cjk[0]]


def classify_char(char: str, japanese_context: bool = False) -> ScriptCategory:
    """Classify a single character into LATIN, HAN, JAPANESE or KOREAN."""
    code = ord(char)
    if _in_ranges(code, KANA_RANGES) and code not in _KANA_NEUTRAL:
        return ScriptCategory.JAPANESE
    if _in_ranges(code, HAN_RANGES):
        return ScriptCategory.JAPANESE if japanese_context else ScriptCategory.HAN
    if _in_ranges(code, KOREAN_RANGES):
        return ScriptCategory.KOREAN
    return ScriptCategory.LATIN


def needs_romanization(text: str, japanese_context: bool = False) -> bool:
    """Whether any non-Latin script is present (timestamps are ignored)."""
    category = classify(strip_timestamp(text), japanese_context)
    return category is not ScriptCategory.LATIN
