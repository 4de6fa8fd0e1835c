"""Fixed-step pacing for the instruction clock and the 60 Hz timers.

The interpreter owns no clocks. A host loop asks a `Pacer` how many `clock`
and `tick` calls it owes for the time that has passed and makes exactly that
many calls, so throughput stays correct under scheduling jitter.
"""

import time
from typing import Optional

from octocore.constants import CLOCK_FREQUENCY, TIMER_FREQUENCY

NANOSECONDS = 1_000_000_000


class Pacer:
    """Tracks two independent fixed-rate cadences in integer nanoseconds."""

    def __init__(
        self,
        clock_frequency: int = CLOCK_FREQUENCY,
        timer_frequency: int = TIMER_FREQUENCY,
        start_ns: Optional[int] = None,
    ):
        if clock_frequency <= 0 or timer_frequency <= 0:
            raise ValueError("frequencies must be positive")
        self.clock_interval = round(NANOSECONDS / clock_frequency)
        self.timer_interval = round(NANOSECONDS / timer_frequency)
        start_ns = time.monotonic_ns() if start_ns is None else start_ns
        self.last_clock = start_ns
        self.last_tick = start_ns

    def owed(self, now_ns: Optional[int] = None) -> tuple[int, int]:
        """Return (clocks, ticks) owed at `now_ns` and consume them.

        Only whole intervals are consumed; the remainder carries over to the
        next call. A timestamp earlier than the last one owes nothing.
        """
        now_ns = time.monotonic_ns() if now_ns is None else now_ns
        clocks = max(now_ns - self.last_clock, 0) // self.clock_interval
        ticks = max(now_ns - self.last_tick, 0) // self.timer_interval
        self.last_clock += clocks * self.clock_interval
        self.last_tick += ticks * self.timer_interval
        return clocks, ticks
