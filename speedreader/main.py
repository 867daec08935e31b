#!/usr/bin/env python3
"""
Speed Reader - Main CLI

Terminal speed reader that shows text one word at a time at a chosen pace.

Features:
- Reads a text file or piped standard input
- Adjustable words per minute while reading
- Pause, resume and quit from the keyboard
- Configurable key bindings (YAML settings file)
- AI comprehension check of your summary after reading (OpenRouter)
"""

import queue
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import click

from speedreader import __version__
from speedreader.evaluation import EvaluationClient, EvaluationError
from speedreader.playback import (
    InputListener,
    KeyBindings,
    PlaybackResult,
    RateController,
    RenderError,
    Scheduler,
    TerminalKeySource,
    TerminalRenderer,
    tokenize,
)
from speedreader.summary import open_prompt_stream, read_summary
from speedreader.text_source import TextSourceError, read_text
from speedreader.utils import logger
from speedreader.utils.config import Config, ConfigError


def run_session(text: str, config: Config, key_source=None, renderer=None) -> PlaybackResult:
    """
    Run one paced playback session over ``text``.

    Args:
        text: Raw text to read
        config: Resolved settings
        key_source: Key reader, defaults to the controlling terminal
        renderer: Display, defaults to the full-screen terminal renderer

    Returns:
        PlaybackResult describing how the session ended
    """
    session = tokenize(text, config.chunk_size)
    bindings = KeyBindings.from_mapping(config.keys)
    rate = RateController(config.wpm, config.wpm_step, ceiling=config.max_wpm)
    commands = queue.Queue()

    with ExitStack() as stack:
        # Unwinds in reverse: listener stops, screen is restored, then the tty
        keys = stack.enter_context(key_source or TerminalKeySource())
        display = stack.enter_context(
            renderer or TerminalRenderer(bindings, console=logger.console, wpm=rate.wpm)
        )
        stack.enter_context(InputListener(keys, bindings, commands))

        scheduler = Scheduler(session, rate, display, commands, countdown=config.countdown)
        return scheduler.run()


def evaluate_summary(text: str, result: PlaybackResult, config: Config) -> None:
    """Prompt for a summary and print the model's evaluation of it."""
    logger.step("Summarise what you read", 1, 2)
    try:
        with open_prompt_stream() as stream:
            summary = read_summary(stream)
    except OSError as e:
        logger.error(f"Could not read summary from terminal: {e}")
        return

    if not summary.strip():
        logger.warning("No summary provided. Exiting.")
        return

    logger.step("Evaluating comprehension", 2, 2)
    client = EvaluationClient(model=config.model)
    try:
        evaluation = client.evaluate(text, summary, result.wpm)
    except EvaluationError as e:
        logger.error(f"Evaluation failed: {e}")
        return
    finally:
        client.close()

    logger.success("AI analysis complete!")
    logger.verbatim(evaluation.content)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.option(
    "-f", "--file", "file_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path of the text file to speed read (default: read stdin)",
)
@click.option(
    "--wpm",
    type=click.IntRange(min=1),
    default=None,
    help="Words per minute (default: from config)",
)
@click.option(
    "--init-config",
    is_flag=True,
    help="Generate a default config file and exit",
)
def cli(file_path: Optional[str], wpm: Optional[int], init_config: bool):
    """
    Speed Reader

    Shows text one word at a time. Space pauses, q quits, +/- change the
    pace. After the last word you are asked for a summary, which is graded
    by an AI model (needs OPEN_ROUTER_API_KEY).
    """
    if init_config:
        try:
            path = Config().save()
        except ConfigError as e:
            logger.error(str(e))
            sys.exit(1)
        logger.success(f"Default configuration created at: {path}")
        return

    try:
        config = Config.load()
        if wpm is not None:
            config = config.with_wpm(wpm)
        text = read_text(file_path)
    except (ConfigError, TextSourceError) as e:
        logger.error(str(e))
        sys.exit(1)

    logger.header(f"Speed reading {Path(file_path).name if file_path else 'stdin'} at {config.wpm} WPM")
    try:
        result = run_session(text, config)
    except (RenderError, OSError) as e:
        logger.error(f"Error during speed reading: {e}")
        sys.exit(1)

    if not result.finished:
        logger.warning(f"Stopped at word {result.position} / {result.total}.")
        return

    logger.success(f"Finished {result.total} words at {result.wpm} WPM.")
    evaluate_summary(text, result, config)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
