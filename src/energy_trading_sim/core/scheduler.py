"""Deterministic timer scheduler.

Replaces wall-clock intervals and timeouts. Nothing here reads the real
clock: a driver (test, headless runner or async loop) calls ``advance``
with elapsed simulated milliseconds and due jobs fire in due-time order.
Jobs due at the same instant fire in registration order.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(order=True)
class _Job:
    due_ms: int
    seq: int
    job_id: int = field(compare=False)
    callback: Callable[[], None] = field(compare=False)
    interval_ms: int | None = field(default=None, compare=False)


class Scheduler:
    """Recurring and one-shot jobs on a simulated millisecond timeline."""

    def __init__(self) -> None:
        self.now_ms: int = 0
        self._queue: list[_Job] = []
        self._active: set[int] = set()
        self._ids = itertools.count(1)
        self._seq = itertools.count()

    def every(self, interval_ms: int, callback: Callable[[], None]) -> int:
        """Run ``callback`` every ``interval_ms`` from now. Returns a job id."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        return self._push(self.now_ms + interval_ms, callback, interval_ms)

    def after(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Run ``callback`` once after ``delay_ms``. Returns a job id."""
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        return self._push(self.now_ms + delay_ms, callback, None)

    def cancel(self, job_id: int) -> bool:
        """Cancel a job. Returns False if it was not active."""
        if job_id in self._active:
            self._active.discard(job_id)
            return True
        return False

    def is_active(self, job_id: int | None) -> bool:
        return job_id is not None and job_id in self._active

    def advance(self, elapsed_ms: int) -> int:
        """Move time forward and fire every job that comes due.

        A job cancelled by an earlier callback in the same advance does not
        fire.

        Returns:
            Number of callbacks fired.
        """
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be non-negative")
        target = self.now_ms + elapsed_ms
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            job = heapq.heappop(self._queue)
            if job.job_id not in self._active:
                continue
            self.now_ms = job.due_ms
            if job.interval_ms is not None:
                job.due_ms += job.interval_ms
                heapq.heappush(self._queue, job)
            else:
                self._active.discard(job.job_id)
            job.callback()
            fired += 1
        self.now_ms = target
        return fired

    def pending(self) -> int:
        return len(self._active)

    def _push(
        self, due_ms: int, callback: Callable[[], None], interval_ms: int | None
    ) -> int:
        job_id = next(self._ids)
        heapq.heappush(
            self._queue,
            _Job(
                due_ms=due_ms,
                seq=next(self._seq),
                job_id=job_id,
                callback=callback,
                interval_ms=interval_ms,
            ),
        )
        self._active.add(job_id)
        return job_id
