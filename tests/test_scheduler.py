"""Tests for the delayed-callback schedulers."""

from __future__ import annotations

import asyncio
import threading
import time
import unittest
from unittest.mock import MagicMock

from timing import AsyncioScheduler, ManualScheduler, Scheduler, ThreadingScheduler, debounce


class TestManualScheduler(unittest.TestCase):
    def setUp(self):
        self.sched = ManualScheduler()

    def test_fires_in_due_order(self):
        order = []
        self.sched.schedule(30, lambda: order.append("late"))
        self.sched.schedule(10, lambda: order.append("early"))
        self.sched.schedule(10, lambda: order.append("early-2"))
        self.sched.advance(30)
        self.assertEqual(order, ["early", "early-2", "late"])
        self.assertEqual(self.sched.now, 30)

    def test_cancel(self):
        cb = MagicMock()
        handle = self.sched.schedule(10, cb)
        self.sched.cancel(handle)
        self.sched.cancel(handle)
        self.sched.advance(100)
        cb.assert_not_called()
        self.assertEqual(self.sched.pending_count, 0)

    def test_clock_visible_inside_callback(self):
        seen = []
        self.sched.schedule(40, lambda: seen.append(self.sched.now))
        self.sched.advance(100)
        self.assertEqual(seen, [40])

    def test_run_all(self):
        cb = MagicMock()
        self.sched.schedule(500, cb)
        self.sched.run_all()
        cb.assert_called_once_with()
        self.assertEqual(self.sched.now, 500)


class TestSchedulerBase(unittest.TestCase):
    def test_base_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            Scheduler().schedule(1, print)
        with self.assertRaises(NotImplementedError):
            Scheduler().cancel(None)


class TestThreadingScheduler(unittest.TestCase):
    def test_debounce_fires_on_timer_thread(self):
        fired = threading.Event()
        received = []

        def target(value):
            received.append(value)
            fired.set()

        debounced = debounce(target, 10, scheduler=ThreadingScheduler())
        debounced("a")
        debounced("b")
        self.assertTrue(fired.wait(timeout=2.0))
        self.assertEqual(received, ["b"])

    def test_default_scheduler_never_overlaps_invocations(self):
        counter_lock = threading.Lock()
        first_started = threading.Event()
        release_first = threading.Event()
        all_done = threading.Event()
        active = 0
        max_active = 0
        finished = []

        def target(value):
            nonlocal active, max_active
            with counter_lock:
                active += 1
                max_active = max(max_active, active)
            if value == "a":
                first_started.set()
                release_first.wait(timeout=2.0)
            with counter_lock:
                active -= 1
                finished.append(value)
                if len(finished) == 2:
                    all_done.set()

        debounced = debounce(target, 20)
        debounced("a")
        self.assertTrue(first_started.wait(timeout=2.0))
        debounced("b")
        # The second timer falls due while the first target is still running.
        time.sleep(0.1)
        release_first.set()
        self.assertTrue(all_done.wait(timeout=2.0))
        self.assertEqual(max_active, 1)
        self.assertEqual(finished, ["a", "b"])

    def test_cancel_stops_timer(self):
        sched = ThreadingScheduler()
        cb = MagicMock()
        timer = sched.schedule(50, cb)
        sched.cancel(timer)
        timer.join(timeout=1.0)
        cb.assert_not_called()


class TestAsyncioScheduler(unittest.IsolatedAsyncioTestCase):
    async def test_debounce_on_event_loop(self):
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        debounced = debounce(lambda v: done.set_result(v), 10, scheduler=AsyncioScheduler())
        debounced(1)
        debounced(2)
        self.assertEqual(await asyncio.wait_for(done, timeout=2.0), 2)

    async def test_cancel(self):
        cb = MagicMock()
        sched = AsyncioScheduler(asyncio.get_running_loop())
        handle = sched.schedule(10, cb)
        sched.cancel(handle)
        await asyncio.sleep(0.05)
        cb.assert_not_called()


if __name__ == "__main__":
    unittest.main(verbosity=2)
