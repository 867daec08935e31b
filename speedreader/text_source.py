"""
Text source resolution: the file given with --file, or standard input.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO


class TextSourceError(Exception):
    """Raised when the text to read cannot be obtained."""


def read_text(file_path: Optional[str] = None, stdin: Optional[TextIO] = None) -> str:
    """
    Read the text to speed read.

    Args:
        file_path: Path of a UTF-8 text file, or None to read stdin
        stdin: Stream used instead of sys.stdin (tests)

    Returns:
        The raw text, never blank

    Raises:
        TextSourceError: If the file is missing or unreadable, or the text is blank
    """
    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise TextSourceError(f"The file '{file_path}' does not exist.")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TextSourceError(f"Failed to read '{file_path}': {e}") from e
    else:
        stream = stdin or sys.stdin
        try:
            text = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TextSourceError(f"Error reading from stdin: {e}") from e

    if not text.strip():
        raise TextSourceError(
            "No text provided. Please provide a file with text or pipe text to stdin."
        )

    return text
