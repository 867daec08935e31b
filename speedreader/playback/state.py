"""
Playback State Machine

Run mode and position for one session. Only the scheduler writes here;
the input listener reaches it through Command values on a queue.
"""

from enum import Enum


class RunMode(Enum):
    """Playback run state."""

    RUNNING = "running"
    PAUSED = "paused"
    QUIT = "quit"
    FINISHED = "finished"

    @property
    def is_terminal(self) -> bool:
        return self in (RunMode.QUIT, RunMode.FINISHED)


class Command(Enum):
    """Control commands produced from key presses."""

    TOGGLE_PAUSE = "pause"
    QUIT = "quit"
    INCREASE_RATE = "increase_wpm"
    DECREASE_RATE = "decrease_wpm"


class PlaybackState:
    """
    Run mode plus current position over a session of ``total`` units.

    Transitions:
        RUNNING --TOGGLE_PAUSE--> PAUSED --TOGGLE_PAUSE--> RUNNING
        RUNNING/PAUSED --QUIT--> QUIT
        RUNNING --position reaches total--> FINISHED
    Commands received in QUIT or FINISHED are ignored.
    """

    def __init__(self, total: int):
        self.total = total
        self.position = 0
        self.mode = RunMode.RUNNING

    def __repr__(self) -> str:
        return f"PlaybackState(mode={self.mode.name}, position={self.position}/{self.total})"

    @property
    def is_running(self) -> bool:
        return self.mode is RunMode.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.mode is RunMode.PAUSED

    @property
    def is_terminal(self) -> bool:
        return self.mode.is_terminal

    @property
    def at_end(self) -> bool:
        return self.position >= self.total

    def apply(self, command: Command) -> RunMode:
        """
        Apply a run-control command and return the resulting mode.

        Rate commands leave the run mode untouched.
        """
        if self.is_terminal:
            return self.mode

        if command is Command.QUIT:
            self.mode = RunMode.QUIT
        elif command is Command.TOGGLE_PAUSE:
            self.mode = RunMode.RUNNING if self.is_paused else RunMode.PAUSED

        return self.mode

    def advance(self) -> int:
        """Move past the unit just shown."""
        if not self.is_running:
            raise RuntimeError(f"Cannot advance while {self.mode.name}")
        if self.at_end:
            raise RuntimeError("Cannot advance past the end of the session")
        self.position += 1
        return self.position

    def finish(self) -> None:
        """Enter FINISHED once every unit has been shown."""
        if not self.is_running or not self.at_end:
            raise RuntimeError(f"Cannot finish from {self!r}")
        self.mode = RunMode.FINISHED
