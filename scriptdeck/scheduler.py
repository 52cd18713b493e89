"""Repeating timers for background-service ticks."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle(ABC):
    """A repeating timer that can be cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the timer. Cancelling twice is a no-op."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether the timer was cancelled."""
        pass


class Scheduler(ABC):
    """Abstract source of repeating timers."""

    @abstractmethod
    def call_repeating(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Invoke callback every interval seconds, first time after one interval.

        Args:
            interval: Period in seconds, positive
            callback: Function called on each tick

        Returns:
            Handle to cancel the timer
        """
        pass


class _LoopTimer(TimerHandle):
    """Repeating timer re-armed with loop.call_later on every fire."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle: Optional[asyncio.TimerHandle] = None
        self._arm()

    def _arm(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Arm first so a slow callback never delays the next tick
        self._arm()
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class LoopScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_repeating(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _LoopTimer(loop, interval, callback)
