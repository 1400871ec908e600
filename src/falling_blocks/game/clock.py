"""Cooperative time source for the engine.

Nothing in the engine reads the wall clock. Delayed work is registered with
`ManualClock.call_later` and only runs when the owner advances the clock,
either by hand (tests, the gym environment) or with real frame deltas (the
pygame loop).
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(order=True)
class ScheduledStep:
    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualClock:
    def __init__(self) -> None:
        self.now_ms = 0.0
        self._queue: List[ScheduledStep] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledStep:
        step = ScheduledStep(self.now_ms + max(0.0, float(delay_ms)), next(self._seq), callback)
        heapq.heappush(self._queue, step)
        return step

    def cancel(self, step: Optional[ScheduledStep]) -> None:
        if step is not None:
            step.cancelled = True

    def pending(self) -> int:
        return sum(1 for step in self._queue if not step.cancelled)

    def next_due(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0].due_ms if self._queue else None

    def advance(self, ms: float) -> int:
        """Move time forward by `ms`, firing due steps in order. Returns how many fired."""
        target = self.now_ms + max(0.0, float(ms))
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0].due_ms > target:
                break
            step = heapq.heappop(self._queue)
            self.now_ms = step.due_ms
            step.callback()
            fired += 1
        self.now_ms = target
        return fired

    def advance_to_next(self) -> bool:
        due = self.next_due()
        if due is None:
            return False
        self.advance(due - self.now_ms)
        return True

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
