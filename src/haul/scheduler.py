"""Fixed-rate cooperative animation scheduler and the barrier that joins animations.

The TickManager owns the only timing loop in the game. It is started lazily by
the first scheduled animation and torn down once a tick leaves nothing to run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

from pyglet import clock as pyglet_clock

from haul.constants import TICK_INTERVAL

logger = logging.getLogger(__name__)

Completion = Callable[[], None]


class Animation(Protocol):
    def tick(self, dt: float) -> bool:
        """Advance by ``dt`` seconds; return False once finished."""
        ...


class IntervalClock(Protocol):
    """The slice of pyglet's Clock the scheduler relies on."""

    def schedule_interval(self, func: Callable[..., Any], interval: float, *args: Any, **kwargs: Any) -> None: ...

    def unschedule(self, func: Callable[..., Any]) -> None: ...


def _noop() -> None:
    pass


def multi_completion(count: int, completion: Completion) -> Completion:
    """Join ``count`` completions into a single one.

    Returns a signal to hand to each contributing animation. ``completion``
    fires exactly once, on the call that brings the count to zero. A barrier
    created with ``count == 0`` fires ``completion`` immediately, since
    nothing would ever signal it.
    """
    if count < 0:
        raise ValueError(f"Barrier count cannot be negative, got {count}")
    if count == 0:
        completion()
        return _noop
    remaining = count

    def signal() -> None:
        nonlocal remaining
        if remaining <= 0:
            logger.debug("Barrier already released; ignoring extra signal")
            return
        remaining -= 1
        if remaining == 0:
            completion()

    return signal


@dataclass(slots=True, eq=False)
class AnimationRecord:
    animation: Animation
    completion: Completion


class TickManager:
    """Advances every scheduled animation once per tick, in registration order.

    Per tick: all animations step with the same ``dt``; finished records are
    compacted out of the live set after the step pass; their completions then
    fire in finishing order; ``redraw`` runs exactly once. Animations scheduled
    by a completion start stepping on the next tick.
    """

    def __init__(
        self,
        redraw: Optional[Callable[[], None]] = None,
        *,
        clock: Optional[IntervalClock] = None,
        interval: float = TICK_INTERVAL,
    ) -> None:
        self._records: List[AnimationRecord] = []
        self._redraw = redraw or _noop
        self._clock: IntervalClock = clock or pyglet_clock.get_default()
        self.interval = interval
        self._running = False
        self.ticks = 0

    def __len__(self) -> int:
        return len(self._records)

    @property
    def active(self) -> bool:
        return bool(self._records)

    @property
    def running(self) -> bool:
        """True while the periodic timer is scheduled on the clock."""
        return self._running

    def schedule(self, animation: Animation, on_complete: Optional[Completion] = None) -> AnimationRecord:
        record = AnimationRecord(animation, on_complete or _noop)
        self._records.append(record)
        if not self._running:
            self._start()
        return record

    def tick(self, dt: float) -> None:
        finished: List[AnimationRecord] = []
        for record in list(self._records):
            if not record.animation.tick(dt):
                finished.append(record)
        if finished:
            self._records = [record for record in self._records if record not in finished]
            for record in finished:
                record.completion()
        self.ticks += 1
        self._redraw()

    def run_until_idle(self, dt: float | None = None, *, max_ticks: int = 10_000) -> int:
        """Tick synchronously until nothing is scheduled; returns the tick count.

        Used by headless simulations and tests in place of the real-time loop.
        """
        step = self.interval if dt is None else dt
        count = 0
        while self._records:
            if count >= max_ticks:
                raise RuntimeError(f"Animations still running after {max_ticks} ticks")
            self.tick(step)
            count += 1
        if self._running:
            self._stop()
        return count

    def _on_interval(self, dt: float, *args: Any) -> None:
        self.tick(dt)
        if not self._records:
            self._stop()

    def _start(self) -> None:
        self._clock.schedule_interval(self._on_interval, self.interval)
        self._running = True
        logger.debug("Tick loop started (interval %.4fs)", self.interval)

    def _stop(self) -> None:
        self._clock.unschedule(self._on_interval)
        self._running = False
        logger.debug("Tick loop stopped after %d ticks", self.ticks)
