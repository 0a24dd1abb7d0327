from __future__ import annotations

import logging
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)

# Absorbs float drift when many small steps should add up to one interval
_EPSILON = 1e-9


class ScheduledTask:
    """Handle for a repeating callback. ``cancel()`` is idempotent."""

    def __init__(self, callback: Callable[[], None], interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.callback = callback
        self.interval = float(interval)
        self.cancelled = False
        self._on_cancel: List[Callable[[], None]] = []

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        for hook in self._on_cancel:
            hook()
        self._on_cancel.clear()


class Scheduler(Protocol):
    """Anything that can run a callback every ``interval`` seconds until cancelled."""

    def schedule_interval(self, callback: Callable[[], None], interval: float) -> ScheduledTask:  # pragma: no cover - interface
        ...


class FrameClock:
    """Scheduler driven by explicit time steps.

    The owner calls ``advance(dt)`` once per frame. Each task keeps its own
    accumulator and fires once for every whole interval that has elapsed, so a
    large ``dt`` can fire a task several times. Cancelling a task from inside a
    callback (including the task's own) takes effect immediately.
    """

    def __init__(self) -> None:
        self._tasks: List[ScheduledTask] = []
        self._accumulated: dict[int, float] = {}
        self.now: float = 0.0

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.cancelled)

    def schedule_interval(self, callback: Callable[[], None], interval: float) -> ScheduledTask:
        task = ScheduledTask(callback, interval)
        self._tasks.append(task)
        self._accumulated[id(task)] = 0.0
        task._on_cancel.append(lambda: self._forget(task))
        return task

    def _forget(self, task: ScheduledTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
        self._accumulated.pop(id(task), None)

    def advance(self, dt: float) -> None:
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self.now += dt
        for task in list(self._tasks):
            if task.cancelled:
                continue
            acc = self._accumulated.get(id(task), 0.0) + dt
            while acc + _EPSILON >= task.interval and not task.cancelled:
                acc -= task.interval
                task.callback()
            if not task.cancelled:
                self._accumulated[id(task)] = acc


class ArcadeScheduler:
    """Scheduler backed by Arcade's (pyglet) clock. Imports arcade lazily."""

    def __init__(self) -> None:
        import arcade

        self._arcade = arcade

    def schedule_interval(self, callback: Callable[[], None], interval: float) -> ScheduledTask:
        task = ScheduledTask(callback, interval)

        # Arcade identifies scheduled functions by identity, so each task gets its own.
        def _fire(_delta_time: float) -> None:
            if not task.cancelled:
                task.callback()

        self._arcade.schedule(_fire, task.interval)
        task._on_cancel.append(lambda: self._arcade.unschedule(_fire))
        logger.debug("Scheduled task every %.2fs on arcade clock", task.interval)
        return task


__all__ = ["ScheduledTask", "Scheduler", "FrameClock", "ArcadeScheduler"]
