"""Delayed-callback schedulers used by the debounce controller.

Three implementations are provided:

* ``ThreadingScheduler`` – fires callbacks from ``threading.Timer`` threads.
* ``AsyncioScheduler``   – fires callbacks on an asyncio event loop.
* ``ManualScheduler``    – virtual clock advanced by hand; deterministic,
                           intended for tests and simulations.

All delays are in milliseconds. ``cancel`` accepts any handle previously
returned by ``schedule`` and is a no-op once the callback has fired or been
cancelled.
"""

from __future__ import annotations

import asyncio
import itertools
import threading
from typing import Any, Callable


Callback = Callable[[], Any]


class Scheduler:
    """Generic base class for schedulers.

    Subclass and override ``schedule`` and ``cancel``.
    """

    def schedule(self, delay_ms: int, callback: Callback) -> Any:
        """Run *callback* once after *delay_ms*; return a cancellable handle."""
        raise NotImplementedError("Scheduler.schedule() must be implemented.")

    def cancel(self, handle: Any) -> None:
        """Prevent the callback behind *handle* from running."""
        raise NotImplementedError("Scheduler.cancel() must be implemented.")


class ThreadingScheduler(Scheduler):
    """Runs each callback on its own daemon ``threading.Timer``."""

    def schedule(self, delay_ms: int, callback: Callback) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class AsyncioScheduler(Scheduler):
    """Schedules callbacks with ``loop.call_later``.

    Args:
        loop: Event loop to use.  Falls back to the running loop at the time
              ``schedule`` is called.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ManualScheduler(Scheduler):
    """Virtual-time scheduler driven explicitly through ``advance``.

    Usage
    -----
    >>> sched = ManualScheduler()
    >>> fired = []
    >>> _ = sched.schedule(100, lambda: fired.append(sched.now))
    >>> sched.advance(99); fired
    []
    >>> sched.advance(1); fired
    [100]
    """

    def __init__(self, start_ms: int = 0):
        self.now = start_ms
        self._ids = itertools.count()
        self._pending: dict[int, tuple[int, Callback]] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def schedule(self, delay_ms: int, callback: Callback) -> int:
        handle = next(self._ids)
        self._pending[handle] = (self.now + delay_ms, callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def advance(self, ms: int) -> None:
        """Move the clock forward by *ms*, firing due callbacks in order.

        Callbacks scheduled while advancing fire too if they fall due before
        the new time.  An exception raised by a callback propagates, leaving
        the clock at that callback's due time.
        """
        target = self.now + ms
        while True:
            due = [(when, handle) for handle, (when, _) in self._pending.items() if when <= target]
            if not due:
                break
            when, handle = min(due)
            _, callback = self._pending.pop(handle)
            self.now = when
            callback()
        self.now = target

    def run_all(self) -> None:
        """Fire every pending callback, advancing to the last due time."""
        while self._pending:
            latest = max(when for when, _ in self._pending.values())
            self.advance(max(0, latest - self.now))
