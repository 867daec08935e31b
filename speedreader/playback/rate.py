"""
Rate Controller

Holds the current words-per-minute value and derives the inter-unit delay.
"""

from typing import Optional

MIN_WPM = 1
MS_PER_MINUTE = 60_000


class RateController:
    """Words-per-minute state with stepped, clamped adjustment."""

    def __init__(
        self,
        wpm: int = 258,
        step: int = 5,
        floor: int = MIN_WPM,
        ceiling: Optional[int] = None,
    ):
        """
        Initialize the rate controller.

        Args:
            wpm: Starting words per minute
            step: Change applied by increment() and decrement()
            floor: Lowest allowed rate, at least 1
            ceiling: Highest allowed rate, or None for no upper clamp
        """
        if step < 1:
            raise ValueError(f"step must be >= 1, got {step}")
        if floor < MIN_WPM:
            raise ValueError(f"floor must be >= {MIN_WPM}, got {floor}")
        if ceiling is not None and ceiling < floor:
            raise ValueError(f"ceiling {ceiling} is below floor {floor}")

        self.step = step
        self.floor = floor
        self.ceiling = ceiling
        self._wpm = self._clamp(wpm)

    @property
    def wpm(self) -> int:
        """Get the current words per minute."""
        return self._wpm

    def _clamp(self, wpm: int) -> int:
        wpm = max(wpm, self.floor)
        if self.ceiling is not None:
            wpm = min(wpm, self.ceiling)
        return wpm

    def increment(self) -> int:
        """Raise the rate by one step and return the new rate."""
        self._wpm = self._clamp(self._wpm + self.step)
        return self._wpm

    def decrement(self) -> int:
        """Lower the rate by one step, never below the floor."""
        self._wpm = self._clamp(self._wpm - self.step)
        return self._wpm

    def delay_for_current_rate(self) -> int:
        """Milliseconds between units at the current rate, at least 1."""
        return max(MS_PER_MINUTE // self._wpm, 1)

    def delay_seconds(self) -> float:
        return self.delay_for_current_rate() / 1000.0
