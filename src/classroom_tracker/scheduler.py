import heapq
import itertools
import logging
from typing import Callable, Optional
import schedule

logger = logging.getLogger(__name__)

# Scheduler: one-shot deferred callbacks for the simulated work and grading delays
# Everything fires on the caller's thread from run_pending()


class DeferredScheduler:
    """
    Runs one-shot deferred callbacks on top of a ``schedule.Scheduler``.

    Each callback is registered as a job that cancels itself after its
    first run. Nothing fires until ``run_pending`` is called, so all
    callbacks execute on the thread driving the loop.
    """

    def __init__(self, jobs: Optional[schedule.Scheduler] = None):
        self.jobs = jobs if jobs is not None else schedule.Scheduler()

    def call_later(self, delay: float, callback: Callable, *args) -> schedule.Job:
        """
        Schedules ``callback(*args)`` to run once after ``delay`` seconds.

        Args:
            delay: Latency in seconds
            callback: Callable to run
            *args: Positional arguments passed to the callback

        Returns:
            The underlying schedule job
        """
        job = self.jobs.every(delay).seconds.do(self._run_once, callback, *args)
        logger.debug(f"Deferred {getattr(callback, '__name__', callback)} by {delay}s")
        return job

    @staticmethod
    def _run_once(callback: Callable, *args):
        callback(*args)
        return schedule.CancelJob

    def run_pending(self):
        self.jobs.run_pending()

    @property
    def pending(self) -> int:
        return len(self.jobs.get_jobs())

    @property
    def idle_seconds(self) -> Optional[float]:
        """Seconds until the next callback is due, None when nothing is queued."""
        return self.jobs.idle_seconds


class ManualScheduler:
    """
    Deferred callbacks over a virtual clock.

    Time only moves through ``advance``, which makes delayed behavior
    deterministic in tests.
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable, *args):
        heapq.heappush(self._queue, (self.now + delay, next(self._counter), callback, args))

    def run_pending(self):
        """Fires every callback due at the current virtual time, in insertion order for ties."""
        while self._queue and self._queue[0][0] <= self.now:
            _, _, callback, args = heapq.heappop(self._queue)
            callback(*args)

    def advance(self, seconds: float):
        """Moves the clock forward, firing callbacks (including newly scheduled ones) as they come due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            self.now = max(self.now, self._queue[0][0])
            self.run_pending()
        self.now = target

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def idle_seconds(self) -> Optional[float]:
        if not self._queue:
            return None
        return self._queue[0][0] - self.now


default_scheduler = DeferredScheduler()
