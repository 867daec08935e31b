"""
Scheduler Module

The clock loop: shows each display unit in order, waits the current rate's
delay, and applies queued commands between and during those waits.
"""

import queue
import time
from dataclasses import dataclass
from typing import Optional

from speedreader.playback.rate import RateController
from speedreader.playback.state import Command, PlaybackState, RunMode
from speedreader.playback.tokenizer import Session


@dataclass
class PlaybackResult:
    """Outcome of one playback session."""

    mode: RunMode  # QUIT or FINISHED
    position: int  # Units shown
    total: int
    wpm: int  # Rate at the end of the session

    @property
    def finished(self) -> bool:
        return self.mode is RunMode.FINISHED


class Scheduler:
    """
    Paced playback of a session.

    The scheduler is the only writer of the playback state and the only
    caller of the rate controller's mutators. Commands arrive on a queue
    and are applied in arrival order. Waiting on that queue doubles as an
    interruptible sleep, so a Quit ends the current delay immediately.

    The renderer must provide ``countdown(seconds)``,
    ``show_unit(unit, total, wpm)`` and ``show_status(mode, wpm)``.
    Renderer exceptions are not caught here; they end the session.
    """

    PAUSE_POLL_INTERVAL = 0.25

    def __init__(
        self,
        session: Session,
        rate: RateController,
        renderer,
        commands: Optional["queue.Queue[Command]"] = None,
        countdown: int = 0,
    ):
        """
        Initialize the scheduler.

        Args:
            session: Tokenized units to play
            rate: Rate controller owned by this session
            renderer: Object that draws units and status
            commands: Queue the input listener writes to
            countdown: Seconds of countdown before the first unit
        """
        self.session = session
        self.rate = rate
        self.renderer = renderer
        self.commands = commands if commands is not None else queue.Queue()
        self.countdown = countdown
        self.state = PlaybackState(len(session))

    def run(self) -> PlaybackResult:
        """
        Play the session until every unit was shown or Quit arrives.

        Returns:
            PlaybackResult with the terminal mode and final rate
        """
        if self.countdown and not self.session.is_empty:
            self._count_down()

        while True:
            self._drain()

            if self.state.mode is RunMode.QUIT:
                break

            if self.state.is_paused:
                self._wait_while_paused()
                continue

            if self.state.at_end:
                self.state.finish()
                break

            unit = self.session[self.state.position]
            self.renderer.show_unit(unit, len(self.session), self.rate.wpm)
            self.state.advance()
            self._wait(self.rate.delay_seconds())

        return PlaybackResult(
            mode=self.state.mode,
            position=self.state.position,
            total=self.state.total,
            wpm=self.rate.wpm,
        )

    def _count_down(self) -> None:
        for remaining in range(self.countdown, 0, -1):
            self.renderer.countdown(remaining)
            self._wait(1.0)
            if self.state.is_paused:
                self._wait_while_paused()
            if self.state.is_terminal:
                return

    def _apply(self, command: Command) -> None:
        """Apply one command to the run state or the rate."""
        if self.state.is_terminal:
            return

        if command in (Command.INCREASE_RATE, Command.DECREASE_RATE):
            if command is Command.INCREASE_RATE:
                self.rate.increment()
            else:
                self.rate.decrement()
            self.renderer.show_status(self.state.mode, self.rate.wpm)
            return

        previous = self.state.mode
        mode = self.state.apply(command)
        if mode is not previous and mode is not RunMode.QUIT:
            self.renderer.show_status(mode, self.rate.wpm)

    def _drain(self) -> None:
        """Apply every queued command without blocking."""
        while True:
            try:
                command = self.commands.get_nowait()
            except queue.Empty:
                return
            self._apply(command)

    def _wait(self, seconds: float) -> None:
        """
        Sleep up to ``seconds`` while applying commands as they arrive.

        Returns early on Quit or Pause. Rate changes do not shorten the
        current wait; the new delay applies to the next unit.
        """
        deadline = time.monotonic() + seconds
        while self.state.is_running:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            try:
                command = self.commands.get(timeout=remaining)
            except queue.Empty:
                return
            self._apply(command)

    def _wait_while_paused(self) -> None:
        """Block until a command moves the state out of PAUSED."""
        while self.state.is_paused:
            try:
                command = self.commands.get(timeout=self.PAUSE_POLL_INTERVAL)
            except queue.Empty:
                continue
            self._apply(command)

        # Resuming restarts the delay of the unit on screen at the current rate
        if self.state.is_running and self.state.position > 0:
            self._wait(self.rate.delay_seconds())
