"""
Deferred actions driven by the game loop.

Widgets in this engine count time with per-frame dt accumulators. The
scheduler generalizes that: callers register an action to run after a delay,
and the host advances time once per frame.

Usage:
    scheduler = TickScheduler()
    scheduler.schedule_after(2.0, lambda: label.set_text(""))

    # each frame
    scheduler.update(dt)
"""

from __future__ import annotations

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

Action = Callable[[], None]


@dataclass(order=True)
class ScheduledAction:
    """
    A pending action.

    Ordered by due time, then by the order it was scheduled.
    """
    due: float
    seq: int
    action: Action = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(ABC):
    """Capability for running actions after a delay."""

    @abstractmethod
    def schedule_after(self, delay: float, action: Action, label: str = "") -> ScheduledAction:
        """Run action once `delay` seconds have elapsed."""

    @abstractmethod
    def cancel_all(self) -> None:
        """Cancel every pending action."""


class TickScheduler(Scheduler):
    """
    Scheduler advanced by explicit delta time.

    Deterministic, so it doubles as the fake clock in tests.
    """

    def __init__(self, start_time: float = 0.0):
        self._time = start_time
        self._queue: list[ScheduledAction] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        """Accumulated time in seconds."""
        return self._time

    @property
    def pending(self) -> int:
        """Number of actions still waiting to fire."""
        return sum(1 for item in self._queue if not item.cancelled)

    def schedule_after(self, delay: float, action: Action, label: str = "") -> ScheduledAction:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")

        item = ScheduledAction(
            due=self._time + delay,
            seq=next(self._counter),
            action=action,
            label=label,
        )
        heapq.heappush(self._queue, item)
        logger.debug("Scheduled %s at t=%.3f", label or "action", item.due)
        return item

    def cancel_all(self) -> None:
        if self._queue:
            logger.debug("Cancelling %d scheduled action(s)", self.pending)
        for item in self._queue:
            item.cancel()
        self._queue.clear()

    def update(self, dt: float) -> None:
        """
        Advance time and fire every action that came due.

        Actions run one at a time, so an action that cancels the
        rest of the queue prevents them from firing in this update.
        """
        self._time += dt

        while self._queue and self._queue[0].due <= self._time:
            item = heapq.heappop(self._queue)
            if item.cancelled:
                continue
            item.action()
