"""Deterministic timers and repaint callback for the game loop.

The scheduler never reads a wall clock: the caller advances it by the elapsed
milliseconds of each frame (or by any amount in tests).
"""

from __future__ import annotations

from typing import Callable

Callback = Callable[[], None]


class _Interval:
    def __init__(self, handle: int, period_ms: float, due_ms: float, callback: Callback) -> None:
        self.handle = handle
        self.period_ms = period_ms
        self.due_ms = due_ms
        self.callback = callback


class Scheduler:
    """Repeating interval timers plus a single pending frame callback."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._timers: dict[int, _Interval] = {}
        self._next_handle = 1
        self._frame: Callback | None = None

    @property
    def active_timers(self) -> int:
        return len(self._timers)

    @property
    def frame_pending(self) -> bool:
        return self._frame is not None

    def set_interval(self, period_ms: float, callback: Callback) -> int:
        """Call ``callback`` every ``period_ms``, first at ``now + period_ms``."""
        if period_ms <= 0:
            raise ValueError(f"interval period must be positive, got {period_ms}")
        handle = self._next_handle
        self._next_handle += 1
        self._timers[handle] = _Interval(handle, period_ms, self.now_ms + period_ms, callback)
        return handle

    def clear_interval(self, handle: int | None) -> None:
        if handle is None:
            return
        self._timers.pop(handle, None)

    def advance(self, elapsed_ms: float) -> int:
        """Move the clock forward and fire every timer that came due, in time order.

        Returns the number of callbacks fired.
        """
        target = self.now_ms + max(0.0, elapsed_ms)
        fired = 0
        while True:
            due = [t for t in self._timers.values() if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.handle))
            self.now_ms = timer.due_ms
            timer.due_ms += timer.period_ms
            timer.callback()
            fired += 1
        self.now_ms = target
        return fired

    def request_frame(self, callback: Callback) -> None:
        """Schedule ``callback`` for the next frame, replacing any pending request."""
        self._frame = callback

    def run_frame(self) -> bool:
        """Run the pending frame callback, if any. Returns whether one ran."""
        callback = self._frame
        if callback is None:
            return False
        self._frame = None
        callback()
        return True
