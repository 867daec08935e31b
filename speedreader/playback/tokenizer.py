"""
Tokenizer Module

Splits raw text into the ordered display units shown one per tick.
Units follow whitespace splitting; punctuation stays attached to its word.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class DisplayUnit:
    """One atomic piece of text shown per scheduler tick."""

    index: int  # Position in the session
    text: str  # Literal text, punctuation included

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Session:
    """The complete ordered unit sequence for one invocation."""

    text: str  # Original text, handed to the evaluation client afterwards
    units: Tuple[DisplayUnit, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.units)

    def __getitem__(self, position: int) -> DisplayUnit:
        return self.units[position]

    def __iter__(self) -> Iterator[DisplayUnit]:
        return iter(self.units)

    @property
    def is_empty(self) -> bool:
        return not self.units


class Tokenizer:
    """
    Whitespace tokenizer producing display units.

    Handles:
    - Runs of spaces, tabs and newlines (collapsed)
    - Punctuation attached to a word ("fox," stays one unit)
    - Optional grouping of several words per unit (chunk_size)
    """

    def __init__(self, chunk_size: int = 1):
        """
        Initialize the tokenizer.

        Args:
            chunk_size: Number of words per display unit (default one word)
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    def split(self, text: str) -> List[DisplayUnit]:
        """
        Split text into display units.

        Args:
            text: Raw text to split

        Returns:
            List of DisplayUnit objects, empty for blank text
        """
        words = text.split()
        chunks = [
            " ".join(words[i:i + self.chunk_size])
            for i in range(0, len(words), self.chunk_size)
        ]
        return [DisplayUnit(index=i, text=chunk) for i, chunk in enumerate(chunks)]

    def build_session(self, text: str) -> Session:
        """Tokenize text once into an immutable Session."""
        return Session(text=text, units=tuple(self.split(text)))


def tokenize(text: str, chunk_size: int = 1) -> Session:
    """
    Convenience function to build a session from raw text.

    Args:
        text: Text to tokenize
        chunk_size: Words per display unit

    Returns:
        Session holding the text and its units
    """
    return Tokenizer(chunk_size).build_session(text)
