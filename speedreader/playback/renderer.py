"""
Terminal Renderer

Draws the current unit, rate, progress and control hints full screen
using a rich Live display on the alternate screen.
"""

from typing import Optional

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.table import Table
from rich.text import Text

from speedreader.playback.keys import KeyBindings
from speedreader.playback.state import RunMode
from speedreader.playback.tokenizer import DisplayUnit


class RenderError(Exception):
    """Raised when the terminal can no longer be drawn to."""


class TerminalRenderer:
    """
    Full-screen renderer for a playback session.

    Layout:
        WPM: 258                           Word 12 / 340

                            current

        Controls: Spacebar=Pause, q=Quit, +/- = Adjust WPM
    """

    def __init__(self, bindings: KeyBindings, console: Optional[Console] = None, wpm: int = 0):
        self.bindings = bindings
        self.console = console or Console()
        self._live: Optional[Live] = None

        self._wpm = wpm
        self._unit: Optional[DisplayUnit] = None
        self._total = 0
        self._mode = RunMode.RUNNING
        self._countdown: Optional[int] = None

    def __enter__(self) -> "TerminalRenderer":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Switch to the alternate screen and start the live display."""
        try:
            self._live = Live(
                self.render(),
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
            )
            self._live.start(refresh=True)
        except Exception as e:
            self._live = None
            raise RenderError(f"Failed to initialise terminal display: {e}") from e

    def close(self) -> None:
        """Leave the alternate screen."""
        if self._live is not None:
            live, self._live = self._live, None
            try:
                live.stop()
            except Exception as e:
                raise RenderError(f"Failed to restore terminal: {e}") from e

    def countdown(self, seconds: int) -> None:
        self._countdown = seconds
        self._refresh()

    def show_unit(self, unit: DisplayUnit, total: int, wpm: int) -> None:
        """Draw a display unit with its progress line."""
        self._countdown = None
        self._unit = unit
        self._total = total
        self._wpm = wpm
        self._refresh()

    def show_status(self, mode: RunMode, wpm: int) -> None:
        """Redraw after a pause toggle or rate change."""
        self._mode = mode
        self._wpm = wpm
        self._refresh()

    def _refresh(self) -> None:
        if self._live is None:
            return
        try:
            self._live.update(self.render(), refresh=True)
        except Exception as e:
            raise RenderError(f"Failed to draw to terminal: {e}") from e

    def controls_hint(self) -> str:
        keys = self.bindings
        return (
            f"Controls: {keys.display_name(keys.pause)}=Pause, {keys.quit}=Quit, "
            f"{keys.increase_wpm}/{keys.decrease_wpm} = Adjust WPM"
        )

    def paused_hint(self) -> str:
        return f'Paused. Press "{self.bindings.display_name(self.bindings.pause)}" to resume...'

    def render(self) -> Layout:
        """Build the full-screen layout for the current state."""
        header = Table.grid(expand=True)
        header.add_column(justify="left")
        header.add_column(justify="right")
        progress = f"Word {self._unit.index + 1} / {self._total}" if self._unit else ""
        header.add_row(Text(f"WPM: {self._wpm}"), Text(progress))

        if self._countdown is not None:
            center = Group(
                Text("Starting in...", justify="center"),
                Text(""),
                Text(str(self._countdown), style="bold", justify="center"),
            )
        else:
            lines = [Text(self._unit.text if self._unit else "", style="bold", justify="center")]
            if self._mode is RunMode.PAUSED:
                lines.append(Text(self.paused_hint(), style="yellow", justify="center"))
            center = Group(*lines)

        layout = Layout()
        layout.split_column(
            Layout(header, name="header", size=1),
            Layout(Align.center(center, vertical="middle"), name="body"),
            Layout(Text(self.controls_hint(), style="dim", justify="center"), name="footer", size=2),
        )
        return layout
