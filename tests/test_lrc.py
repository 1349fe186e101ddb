"""Test LRC timestamp helpers."""

import pytest

from lyrics_romanizer.core.lrc import (
    document_from_lrc,
    is_tag_line,
    split_timestamp,
    strip_timestamp,
)


class TestTimestamps:
    def test_split_keeps_token_with_space(self):
        token, text = split_timestamp("[00:01.00] 안녕")
        assert token == "[00:01.00] "
        assert text == "안녕"
        assert token + text == "[00:01.00] 안녕"

    def test_split_without_timestamp(self):
        assert split_timestamp("plain line") == ("", "plain line")

    def test_strip_timestamp_trims(self):
        assert strip_timestamp("[01:23.456]   hello  ") == "hello"

    @pytest.mark.parametrize("line", ["[0:05] hi", "[00:05:50] hi", "  [10:00.1]hi"])
    def test_timestamp_variants(self, line):
        assert strip_timestamp(line) == "hi"

    def test_non_timestamp_brackets_are_text(self):
        assert split_timestamp("[chorus] la la") == ("", "[chorus] la la")


class TestDocuments:
    def test_tag_lines(self):
        assert is_tag_line("[ar:Artist]")
        assert is_tag_line("[offset:+100]")
        assert not is_tag_line("[00:01.00] hello")

    def test_document_from_lrc_derives_lyrics(self, lrc_japanese):
        document = document_from_lrc(lrc_japanese, track_id="song")
        assert document.track_id == "song"
        assert document.lyric_lines == ["今日はいい天気", "愛してる", "I love you", "愛してる"]
        assert document.subtitle_lines[0] == "[00:01.00] 今日はいい天気"
        assert "[ar:" not in document.subtitle_text

    def test_document_from_lrc_keeps_given_lyrics(self):
        document = document_from_lrc("[00:01.00] 안녕", lyrics_text="안녕\n")
        assert document.lyrics_text == "안녕\n"
