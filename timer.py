from __future__ import annotations

import time
from typing import Callable, Optional


class Countdown:
    """One-shot countdown: `poll()` reports the elapsed round exactly once."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None
        self._duration: float = 0.0
        self._round_index: Optional[int] = None
        self._fired: bool = False

    def start(self, duration: float, round_index: int) -> None:
        self._started_at = self._clock()
        self._duration = float(duration)
        self._round_index = round_index
        self._fired = False

    def remaining(self) -> Optional[float]:
        if self._started_at is None:
            return None
        return max(0.0, self._duration - (self._clock() - self._started_at))

    def poll(self) -> Optional[int]:
        """Round index the first time the countdown is seen at zero, else None."""
        if self._fired or self._started_at is None:
            return None
        if self._clock() - self._started_at < self._duration:
            return None
        self._fired = True
        return self._round_index

    @property
    def is_running(self) -> bool:
        return self._started_at is not None and not self._fired
