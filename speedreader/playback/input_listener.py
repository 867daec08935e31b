"""
Input Listener

Background thread that turns key presses into Command values on a queue.
It never touches playback position or run mode directly.
"""

import queue
import threading
from typing import Optional

from speedreader.playback.keys import KeyBindings
from speedreader.playback.state import Command


class InputListener:
    """
    Observe key presses concurrently with the scheduler.

    The key source only has to provide ``read_key(timeout)`` returning a
    character, None on timeout, or "" at end of input.
    """

    POLL_INTERVAL = 0.05

    def __init__(
        self,
        key_source,
        bindings: KeyBindings,
        commands: "queue.Queue[Command]",
        poll_interval: Optional[float] = None,
    ):
        self.key_source = key_source
        self.bindings = bindings
        self.commands = commands
        self.poll_interval = poll_interval or self.POLL_INTERVAL

        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    def __enter__(self) -> "InputListener":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Do not mask an exception already propagating out of the session
        self.stop(raise_errors=exc_type is None)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the listener thread."""
        if self._thread is not None:
            raise RuntimeError("InputListener already started")
        self._thread = threading.Thread(target=self._run, name="input-listener", daemon=True)
        self._thread.start()

    def stop(self, raise_errors: bool = True) -> None:
        """
        Signal the thread to stop and wait for it.

        Raises:
            Exception: Whatever the key source raised inside the thread
        """
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        if raise_errors and self._error is not None:
            error, self._error = self._error, None
            raise error

    def _run(self) -> None:
        try:
            while not self._stop.is_set():
                key = self.key_source.read_key(self.poll_interval)
                if key is None:
                    continue
                if key == "":
                    break

                command = self.bindings.command_for(key)
                if command is not None:
                    self.commands.put(command)
        except Exception as e:
            self._error = e
