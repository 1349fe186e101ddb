"""Command-line interface using Click."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import HINT_SCOPES, ROMAJI_STYLES, ROMANIZATION_SEPARATOR, SHOW_DEBUG_LOG, Settings
from .core.analyzer import AnalyzerLoader
from .core.lrc import document_from_lrc
from .core.processor import LyricsProcessor
from .core.romanization import load_kakasi_analyzer
from .core.router import RomanizationRouter
from .core.script_detection import classify, contains_japanese
from .core.segmenter import segment
from .exceptions import RomanizerError
from .utils.logging import setup_logging
from .utils.validation import validate_input_path


def _build_settings(style, tone_marks, hint_scope) -> Settings:
    return Settings.from_env().with_overrides(
        japanese_romaji_style=style,
        chinese_tone_marks=tone_marks,
        japanese_hint_scope=hint_scope,
    )


def run_processing(subtitle_file: str, lyrics_file: Optional[str], settings: Settings):
    """Load the input files and run one processing pass."""
    subtitle_path = validate_input_path(subtitle_file)
    lyrics_text = None
    if lyrics_file:
        lyrics_text = validate_input_path(lyrics_file).read_text(encoding="utf-8")

    document = document_from_lrc(
        subtitle_path.read_text(encoding="utf-8"),
        track_id=subtitle_path.stem,
        lyrics_text=lyrics_text,
    )
    router = RomanizationRouter(AnalyzerLoader(load_kakasi_analyzer), settings)
    processor = LyricsProcessor(router, settings)
    result = asyncio.run(processor.process(document))
    if result is None:
        raise RomanizerError(f"Could not romanize lyrics from {subtitle_file}")
    return result


def _processing_options(func):
    func = click.option('--lyrics-file', type=click.Path(),
                        help='Plain lyrics file (derived from the LRC when omitted)')(func)
    func = click.option('--style', type=click.Choice(ROMAJI_STYLES), default=None,
                        help='Japanese romaji style')(func)
    func = click.option('--tone-marks/--no-tone-marks', default=None,
                        help='Write pinyin with tone marks')(func)
    func = click.option('--hint-scope', type=click.Choice(HINT_SCOPES), default=None,
                        help='Read Han characters as Japanese per line or per document')(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """Lyrics Romanizer - romanize Japanese, Chinese and Korean lyrics."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose,
        show_debug_log=SHOW_DEBUG_LOG,
    )
    ctx.obj['logger'] = logger


@cli.command()
@click.argument('subtitle_file')
@_processing_options
@click.option('-o', '--output', type=click.Path(), help='Write the result to a file')
@click.option('--separator', default=' / ', show_default=True,
              help='Text placed between a line and its romanization')
@click.option('--lyrics', 'show_lyrics', is_flag=True,
              help='Print plain lyrics instead of timestamped subtitles')
@click.pass_context
def romanize(ctx, subtitle_file, lyrics_file, style, tone_marks, hint_scope,
             output, separator, show_lyrics):
    """Append romanized text to every line of an LRC file."""
    logger = ctx.obj['logger']
    try:
        settings = _build_settings(style, tone_marks, hint_scope)
        result = run_processing(subtitle_file, lyrics_file, settings)
    except RomanizerError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    text = result.document.lyrics_text if show_lyrics else result.document.subtitle_text
    text = text.replace(ROMANIZATION_SEPARATOR, separator)

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info(f"✅ Wrote {len(result.romanization_map)} romanized lines to {output}")
    else:
        click.echo(text)


@cli.command(name='map')
@click.argument('subtitle_file')
@_processing_options
@click.pass_context
def show_map(ctx, subtitle_file, lyrics_file, style, tone_marks, hint_scope):
    """Print the original -> romanized line map as JSON."""
    logger = ctx.obj['logger']
    try:
        settings = _build_settings(style, tone_marks, hint_scope)
        result = run_processing(subtitle_file, lyrics_file, settings)
    except RomanizerError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    click.echo(json.dumps(dict(result.romanization_map), indent=2, ensure_ascii=False))


@cli.command(name='classify')
@click.argument('text')
@click.option('--japanese-hint/--no-japanese-hint', default=None,
              help='Force the Japanese hint (detected from kana by default)')
def classify_text(text, japanese_hint):
    """Show the script category of TEXT and its script runs."""
    hint = contains_japanese(text) if japanese_hint is None else japanese_hint
    click.echo(f"Category: {classify(text, japanese_context=hint).value}")
    for run in segment(text, hint):
        click.echo(f"  {run.category.value:<10} {run.text!r}")


if __name__ == '__main__':
    cli()
