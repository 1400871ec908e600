from __future__ import annotations

from typing import Callable, Optional

from .clock import ManualClock, ScheduledStep


class DropScheduler:
    """Periodic gravity source.

    Stopping discards the partial period; `start` always begins a full one.
    """

    def __init__(self, clock: ManualClock, on_tick: Callable[[], None]) -> None:
        self.clock = clock
        self.on_tick = on_tick
        self.interval_ms: Optional[float] = None
        self._step: Optional[ScheduledStep] = None

    @property
    def running(self) -> bool:
        return self._step is not None

    def start(self, interval_ms: float) -> None:
        self.stop()
        self.interval_ms = float(interval_ms)
        self._arm()

    def stop(self) -> None:
        self.clock.cancel(self._step)
        self._step = None

    def restart(self, interval_ms: float) -> None:
        self.start(interval_ms)

    def _arm(self) -> None:
        assert self.interval_ms is not None
        self._step = self.clock.call_later(self.interval_ms, self._fire)

    def _fire(self) -> None:
        # Re-arm before ticking so the tick may stop or restart us.
        self._arm()
        self.on_tick()
