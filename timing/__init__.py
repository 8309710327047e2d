from timing.debounce import Debounced, debounce
from timing.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "Debounced",
    "ManualScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "debounce",
]
