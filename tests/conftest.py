"""Shared pytest fixtures and test doubles."""
import queue
import time
from collections import defaultdict
from pathlib import Path

import pytest

from speedreader.playback.rate import RateController
from speedreader.playback.scheduler import Scheduler
from speedreader.playback.tokenizer import tokenize

# 60000 WPM gives a 1 ms delay per unit
FAST_WPM = 60_000


class RecordingRenderer:
    """Renderer double that records every draw call.

    ``after_unit`` maps a unit index to commands pushed onto the command
    queue right after that unit is drawn, as if keys were pressed then.
    """

    def __init__(self, commands=None, fail_on=None, fail_with=None):
        self.commands = commands
        self.fail_on = fail_on
        self.fail_with = fail_with or RuntimeError("display lost")
        self.after_unit = defaultdict(list)
        self.events = []
        self.times = []
        self.entered = False
        self.closed = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def countdown(self, seconds):
        self.events.append(("countdown", seconds))
        self.times.append(time.monotonic())

    def show_unit(self, unit, total, wpm):
        if self.fail_on is not None and unit.index == self.fail_on:
            raise self.fail_with
        self.events.append(("unit", unit.index, wpm))
        self.times.append(time.monotonic())
        for command in self.after_unit.get(unit.index, []):
            self.commands.put(command)

    def show_status(self, mode, wpm):
        self.events.append(("status", mode, wpm))
        self.times.append(time.monotonic())

    def time_of(self, event):
        """Monotonic time at which ``event`` was first recorded."""
        return self.times[self.events.index(event)]

    @property
    def shown(self):
        return [event[1] for event in self.events if event[0] == "unit"]

    @property
    def rates(self):
        return [event[2] for event in self.events if event[0] == "unit"]


class ScriptedKeySource:
    """Key source double returning queued keys, then timeouts.

    A None entry in ``keys`` is served as a timeout.
    """

    def __init__(self, keys=(), error=None):
        self.keys = list(keys)
        self.error = error
        self.reads = 0
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True

    def read_key(self, timeout):
        self.reads += 1
        if self.error is not None:
            raise self.error
        if self.keys:
            key = self.keys.pop(0)
            if key is not None:
                return key
        time.sleep(timeout)
        return None


@pytest.fixture
def commands():
    """Fresh command queue."""
    return queue.Queue()


@pytest.fixture
def renderer(commands):
    """Recording renderer wired to the command queue."""
    return RecordingRenderer(commands)


@pytest.fixture
def make_scheduler(commands, renderer):
    """Factory building a scheduler over some text."""

    def _make(text="the quick brown fox", wpm=FAST_WPM, step=5, countdown=0):
        session = tokenize(text)
        rate = RateController(wpm, step)
        return Scheduler(session, rate, renderer, commands, countdown=countdown)

    return _make


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point SPEEDREADER_CONFIG at a temporary file."""
    path = Path(tmp_path) / "speedreader" / "config.yaml"
    monkeypatch.setenv("SPEEDREADER_CONFIG", str(path))
    return path
