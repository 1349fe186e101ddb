"""Split a lyric line into runs of one script category."""

from typing import List, Optional

from .models import ScriptCategory, ScriptRun
from .script_detection import classify_char, contains_japanese


def segment(line: str, japanese_hint: Optional[bool] = None) -> List[ScriptRun]:
    """
    Split ``line`` into maximal runs of a single script category.

    Each codepoint is classified on its own; characters belonging to no
    script (spaces, digits, punctuation) classify as LATIN. With a Japanese
    hint, Han characters are read as Kanji and join Japanese runs.

    Args:
        line: Text to split
        japanese_hint: Whether the surrounding line or document contains kana.
            Computed from ``line`` itself when None.

    Returns:
        Ordered runs whose texts concatenate back to ``line``
    """
    if japanese_hint is None:
        japanese_hint = contains_japanese(line)

    runs: List[ScriptRun] = []
    current_category: Optional[ScriptCategory] = None
    current_text: List[str] = []

    for char in line:
        category = classify_char(char, japanese_hint)
        if category is current_category:
            current_text.append(char)
            continue
        if current_text:
            runs.append(ScriptRun("".join(current_text), current_category))
        current_category = category
        current_text = [char]

    if current_text:
        runs.append(ScriptRun("".join(current_text), current_category))

    return runs
