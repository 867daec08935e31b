"""
Paced Playback Module

Shows text one display unit at a time at a user-controlled rate while a
background listener turns key presses into pause, quit and rate commands.
"""

from speedreader.playback.input_listener import InputListener
from speedreader.playback.keys import KeyBindings, TerminalKeySource
from speedreader.playback.rate import RateController
from speedreader.playback.renderer import RenderError, TerminalRenderer
from speedreader.playback.scheduler import PlaybackResult, Scheduler
from speedreader.playback.state import Command, PlaybackState, RunMode
from speedreader.playback.tokenizer import DisplayUnit, Session, Tokenizer, tokenize

__all__ = [
    "Command",
    "DisplayUnit",
    "InputListener",
    "KeyBindings",
    "PlaybackResult",
    "PlaybackState",
    "RateController",
    "RenderError",
    "RunMode",
    "Scheduler",
    "Session",
    "TerminalKeySource",
    "TerminalRenderer",
    "Tokenizer",
    "tokenize",
]
