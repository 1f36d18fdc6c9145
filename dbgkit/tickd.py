"""Millisecond tick timing reported through a debug device."""

from __future__ import annotations

import time
from typing import Callable

from dbgkit.printd import DebugDevice

_TICK_MASK = 0xFFFFFFFF


def tick_count() -> int:
    """Milliseconds from a monotonic clock, wrapped to 32 bits."""
    return int(time.monotonic() * 1000) & _TICK_MASK


class TickTimer:
    """Measures elapsed ticks and prints them to a debug device."""

    def __init__(
        self, device: DebugDevice, clock: Callable[[], int] = tick_count
    ) -> None:
        self.device = device
        self._clock = clock
        self._start = clock()

    def start(self) -> None:
        """Restart the measurement from now."""
        self._start = self._clock()

    def elapsed(self) -> int:
        """Ticks since the last start, with 32-bit wrap-around."""
        return (self._clock() - self._start) & _TICK_MASK

    def _report(self) -> int:
        ticks = self.elapsed()
        self.device.print("tick: %d", ticks)
        self.device.feed(1)
        return ticks

    def step(self) -> int:
        """Print the elapsed ticks and restart; return the ticks printed."""
        ticks = self._report()
        self.start()
        return ticks

    def end(self) -> int:
        """Print the elapsed ticks without restarting."""
        return self._report()