"""Debounce wrapper that collapses bursts of calls into one delayed invocation.

State machine per wrapped instance::

    Idle --call--> Pending --(timer fires | flush | force_next)--> Idle
                   Pending --cancel--> Idle

A call received while ``Pending`` re-arms the timer for a full ``wait`` and
replaces the pending arguments, so only the newest call is ever delivered.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from timing.scheduler import Scheduler, ThreadingScheduler

logger = logging.getLogger(__name__)

_NO_CONTEXT = object()


class Debounced:
    """Callable returned by ``debounce``.

    Parameters
    ----------
    fn:
        Target callable.  Invoked as ``fn(*args, **kwargs)`` for plain calls and
        ``fn(context, *args, **kwargs)`` for calls recorded via ``call_on``.
    wait:
        Delay in milliseconds between the last call and the invocation.
    scheduler:
        Delayed-callback facility.  Only one timer is armed at a time.

    Timer callbacks may arrive on another thread (``ThreadingScheduler``).
    Pending state is guarded by a lock and a firing from a timer that has
    since been disarmed is ignored. Target invocations never overlap.
    """

    def __init__(self, fn: Callable[..., Any], wait: int, scheduler: Scheduler):
        self._fn = fn
        self._wait = wait
        self._scheduler = scheduler
        self._timer: Any = None
        self._generation = 0
        self._pending: tuple[Any, tuple[Any, ...], dict[str, Any]] | None = None
        self._state_lock = threading.Lock()
        # Reentrant so a target may flush or re-call its own wrapper.
        self._invoke_lock = threading.RLock()

    @property
    def wait(self) -> int:
        return self._wait

    @property
    def pending(self) -> bool:
        """``True`` while a call is waiting to be delivered."""
        return self._pending is not None

    # ------------------------------------------------------------------
    # Recording calls
    # ------------------------------------------------------------------

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._record(_NO_CONTEXT, args, kwargs)

    def call_on(self, context: Any, *args: Any, **kwargs: Any) -> None:
        """Record a call that should run against *context*.

        The context is handed to the target as its first positional argument,
        the way a bound method receives ``self``.
        """
        self._record(context, args, kwargs)

    def _record(self, context: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        with self._state_lock:
            self._pending = (context, args, dict(kwargs))
            self._disarm()
            generation = self._generation
            self._timer = self._scheduler.schedule(
                self._wait, lambda: self._on_timer(generation)
            )
        logger.debug("Armed debounce timer for %s (%d ms)", self._name, self._wait)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Drop the pending call without invoking the target."""
        with self._state_lock:
            if self._pending is not None:
                logger.debug("Cancelled pending call to %s", self._name)
            self._disarm()
            self._pending = None

    def flush(self) -> Any:
        """Invoke a pending call now and return its result; else ``None``."""
        with self._state_lock:
            if self._pending is None:
                return None
            self._disarm()
            call = self._take_pending()
        return self._invoke(call)

    def force_next(self) -> None:
        """Deliver the pending call immediately, skipping the rest of the delay."""
        with self._state_lock:
            self._disarm()
            call = self._take_pending()
        if call is not None:
            self._invoke(call)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def _name(self) -> str:
        return getattr(self._fn, "__qualname__", repr(self._fn))

    def _disarm(self) -> None:
        # Caller holds _state_lock.  Bumping the generation invalidates a timer
        # whose callback has already started and can no longer be cancelled.
        self._generation += 1
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None

    def _take_pending(self) -> tuple[Any, tuple[Any, ...], dict[str, Any]] | None:
        # Cleared before the target runs so a raising or re-entrant target
        # leaves the controller Idle.
        call, self._pending = self._pending, None
        return call

    def _on_timer(self, generation: int) -> None:
        with self._state_lock:
            if generation != self._generation:
                logger.debug("Ignoring stale timer for %s", self._name)
                return
            self._timer = None
            call = self._take_pending()
        if call is not None:
            self._invoke(call)

    def _invoke(self, call: tuple[Any, tuple[Any, ...], dict[str, Any]]) -> Any:
        context, args, kwargs = call
        with self._invoke_lock:
            logger.debug("Invoking %s", self._name)
            if context is _NO_CONTEXT:
                return self._fn(*args, **kwargs)
            return self._fn(context, *args, **kwargs)


def debounce(
    fn: Callable[..., Any],
    wait: int,
    scheduler: Scheduler | None = None,
) -> Debounced:
    """Wrap *fn* so rapid calls collapse into one call *wait* ms after the last.

    Raises ``TypeError`` if *fn* is not callable and ``ValueError`` if *wait*
    is not a non-negative integer.
    """
    if not callable(fn):
        raise TypeError("debounce() target must be callable")
    if isinstance(wait, bool) or not isinstance(wait, int) or wait < 0:
        raise ValueError(f"wait must be a non-negative integer, got {wait!r}")
    return Debounced(fn, wait, scheduler or ThreadingScheduler())
