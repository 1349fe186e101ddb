"""Lyrics Romanizer - romanize Japanese, Chinese and Korean song lyrics."""

__version__ = "0.1.0"
