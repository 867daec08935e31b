"""
Keyboard Module

Maps physical keys to control commands and reads single key presses
from the terminal without waiting for Enter.
"""

import codecs
import os
import select
import sys
import termios
import tty
from dataclasses import dataclass
from typing import Dict, Optional, TextIO

from speedreader.playback.state import Command


@dataclass(frozen=True)
class KeyBindings:
    """Action -> key mapping, read-only for the whole session."""

    quit: str = "q"
    pause: str = " "
    increase_wpm: str = "+"
    decrease_wpm: str = "-"

    @classmethod
    def from_mapping(cls, keys: Dict[str, str]) -> "KeyBindings":
        """Build bindings from the ``keys`` section of the settings file."""
        return cls(
            quit=keys.get("quit", cls.quit),
            pause=keys.get("pause", cls.pause),
            increase_wpm=keys.get("increase_wpm", cls.increase_wpm),
            decrease_wpm=keys.get("decrease_wpm", cls.decrease_wpm),
        )

    def command_for(self, key: str) -> Optional[Command]:
        """Translate a key into a command, or None if the key is unbound."""
        return {
            self.quit: Command.QUIT,
            self.pause: Command.TOGGLE_PAUSE,
            self.increase_wpm: Command.INCREASE_RATE,
            self.decrease_wpm: Command.DECREASE_RATE,
        }.get(key)

    @staticmethod
    def display_name(key: str) -> str:
        """Human readable key label."""
        return "Spacebar" if key == " " else key


class TerminalKeySource:
    """
    Read single key presses from a terminal in cbreak mode.

    Use as a context manager so the terminal attributes are always restored.
    When stdin is not a TTY (text was piped in), the controlling terminal
    /dev/tty is opened instead.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._owns_stream = False
        self._saved_attrs = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""

    def __enter__(self) -> "TerminalKeySource":
        if self._stream is None:
            if sys.stdin.isatty():
                self._stream = sys.stdin
            else:
                self._stream = open("/dev/tty", "r", encoding="utf-8", errors="replace")
                self._owns_stream = True

        fd = self._stream.fileno()
        if os.isatty(fd):
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Restore the terminal and release /dev/tty if we opened it."""
        if self._stream is None:
            return
        if self._saved_attrs is not None:
            termios.tcsetattr(self._stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False
        self._stream = None

    def read_key(self, timeout: float) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for one key.

        Returns:
            The character read, None on timeout, or "" at end of input
        """
        if self._stream is None:
            raise RuntimeError("TerminalKeySource used outside its context")

        if not self._pending:
            fd = self._stream.fileno()
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(fd, 64)
            if not data:
                return ""
            self._pending = self._decoder.decode(data)
            if not self._pending:
                return None

        key, self._pending = self._pending[0], self._pending[1:]
        return key
