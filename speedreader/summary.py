"""
Post-session summary prompt.
"""

import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from speedreader.utils import logger


@contextmanager
def open_prompt_stream() -> Iterator[TextIO]:
    """Yield a readable terminal stream, /dev/tty when stdin was piped text."""
    if sys.stdin.isatty():
        yield sys.stdin
        return
    with open("/dev/tty", "r", encoding="utf-8") as tty_stream:
        yield tty_stream


def read_summary(stream: TextIO) -> str:
    """
    Read summary lines until the first empty line or end of input.

    Returns:
        The summary with one trailing newline per line, or "" if none given
    """
    logger.console.print("Please enter your summary of the text. Press Enter on an empty line to finish.")
    logger.console.print("Enter your summary below:")

    lines = []
    for line in iter(stream.readline, ""):
        line = line.rstrip()
        if not line:
            break
        lines.append(line)

    return "".join(f"{line}\n" for line in lines)
