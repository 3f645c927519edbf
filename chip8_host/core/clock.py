"""
Frame clock - wall-clock delta between frames.
"""

import time
from typing import Callable


class FrameClock:
    """
    Remembers when the previous frame finished.

    Args:
        time_source: Returns seconds; monotonic by default so dt never
            goes negative. Tests pass a fake.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic):
        self._time_source = time_source
        self.previous = time_source()

    def reset(self) -> None:
        """Start measuring from now."""
        self.previous = self._time_source()

    def tick(self) -> float:
        """
        Measure seconds since the previous tick and move the mark to now.

        Returns:
            Elapsed seconds, clamped at zero
        """
        now = self._time_source()
        dt = max(0.0, now - self.previous)
        self.previous = now
        return dt

    def now(self) -> float:
        return self._time_source()
