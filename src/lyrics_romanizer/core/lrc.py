"""LRC timestamp handling for subtitle lines.

Subtitle lines are prefixed with a ``[mm:ss.fraction] `` token. This module
splits that token from the line text, which is the join key between the
subtitle text and the plain lyrics text.
"""

import re
from typing import Optional, Tuple

from .models import LyricDocument

# ----------------------
# LRC timestamp regex
# ----------------------
_LRC_TS_RE = re.compile(
    r"""
    ^\s*
    \[                      # opening bracket
    (?P<min>\d+)            # minutes
    :
    (?P<sec>[0-5]?\d)       # seconds
    (?:[.:](?P<frac>\d{1,3}))?  # optional fractional seconds
    \]                      # closing bracket
    \s?
    """,
    re.VERBOSE,
)

# ID tags such as [ar:Artist] or [offset:+100]
_LRC_TAG_RE = re.compile(r"^\s*\[(?P<key>[a-zA-Z#]+):(?P<value>[^\]]*)\]\s*$")


def split_timestamp(line: str) -> Tuple[str, str]:
    """Split a subtitle line into (timestamp token, text).

    The token keeps its trailing space so ``token + text`` rebuilds the line.
    Lines without a timestamp return an empty token.
    """
    match = _LRC_TS_RE.match(line)
    if not match:
        return "", line
    return match.group(0), line[match.end():]


def strip_timestamp(line: str) -> str:
    """Return the line text without its timestamp, trimmed."""
    return split_timestamp(line)[1].strip()


def is_tag_line(line: str) -> bool:
    """Check if line is an LRC ID tag rather than a lyric."""
    return bool(_LRC_TAG_RE.match(line))


def document_from_lrc(
    lrc_text: str, track_id=None, lyrics_text: Optional[str] = None
) -> LyricDocument:
    """
    Build a LyricDocument from LRC text.

    Args:
        lrc_text: Timestamped subtitle text
        track_id: Identifier of the track the lyrics belong to
        lyrics_text: Plain lyrics; derived from the LRC lines when omitted

    Returns:
        LyricDocument whose subtitle text is the LRC without ID tags
    """
    subtitle_lines = [
        line.rstrip("\r")
        for line in lrc_text.splitlines()
        if line.strip() and not is_tag_line(line)
    ]
    if lyrics_text is None:
        lyrics_text = "\n".join(strip_timestamp(line) for line in subtitle_lines)
    return LyricDocument(
        lyrics_text=lyrics_text,
        subtitle_text="\n".join(subtitle_lines),
        track_id=track_id,
    )
