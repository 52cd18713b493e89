"""Registry of background-service keys and their timers.

The registry owns the tracked entries and the process-wide run-state and keeps
one invariant: an entry has a timer if and only if the service is running and
the entry is tracked. It performs no I/O; each tick is handed to the on_tick
callback supplied by the owner.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from .scheduler import Scheduler, TimerHandle
from .settings import KeySettings


logger = logging.getLogger(__name__)


class ServiceState(Enum):
    """Run-state of the background service."""

    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class TrackedEntry:
    """A key bound to the background service."""

    key_id: str
    settings: KeySettings
    generation: int
    timer: Optional[TimerHandle] = None


TickCallback = Callable[[TrackedEntry], None]


class ServiceRegistry:
    """Tracked key bindings and the shared run-state."""

    def __init__(self, scheduler: Scheduler, on_tick: TickCallback):
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._entries: dict[str, TrackedEntry] = {}
        self._state = ServiceState.STOPPED
        self._generations = itertools.count(1)

    @property
    def state(self) -> ServiceState:
        """Current run-state, used for toggle semantics on key press."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ServiceState.RUNNING

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key_id: object) -> bool:
        return key_id in self._entries

    def __iter__(self) -> Iterator[TrackedEntry]:
        return iter(list(self._entries.values()))

    def get(self, key_id: str) -> Optional[TrackedEntry]:
        return self._entries.get(key_id)

    def is_current(self, key_id: str, generation: int) -> bool:
        """Whether the entry of that generation is still tracked."""
        entry = self._entries.get(key_id)
        return entry is not None and entry.generation == generation

    def register(self, key_id: str, settings: KeySettings) -> TrackedEntry:
        """Track a key or update the settings of a tracked one.

        While running, an update replaces the timer so a new interval takes
        effect immediately. A new key tracked while running is armed at once,
        its first tick one interval later.

        Args:
            key_id: Identifier of the key instance
            settings: Latest settings of the key

        Returns:
            The tracked entry
        """
        logger.info("checking if action is already tracked")
        entry = self._entries.get(key_id)
        if entry is not None:
            self._cancel_timer(entry)
            entry.settings = settings
            if self.is_running:
                entry.timer = self._create_timer(entry)
            logger.info("action already tracked - settings updated")
            return entry

        entry = TrackedEntry(key_id=key_id, settings=settings, generation=next(self._generations))
        self._entries[key_id] = entry
        if self.is_running:
            entry.timer = self._create_timer(entry)
        return entry

    def unregister(self, key_id: str) -> None:
        """Stop tracking a key. Unknown ids are ignored."""
        entry = self._entries.pop(key_id, None)
        if entry is None:
            return
        if entry.timer is not None:
            logger.info(f"stopping execution of the action, id: {key_id}")
        self._cancel_timer(entry)

    def start(self) -> None:
        """Arm a fresh timer for every tracked entry. Nothing runs immediately."""
        logger.info("starting Background Service")
        self._state = ServiceState.RUNNING
        for entry in self._entries.values():
            self._cancel_timer(entry)
            entry.timer = self._create_timer(entry)

    def stop(self) -> None:
        """Cancel every timer."""
        logger.info("stopping Background Service")
        self._state = ServiceState.STOPPED
        for entry in self._entries.values():
            self._cancel_timer(entry)

    def _create_timer(self, entry: TrackedEntry) -> TimerHandle:
        key_id = entry.key_id
        interval = entry.settings.interval_seconds

        def tick() -> None:
            # Settings are read at fire time so updates apply from the next tick
            current = self._entries.get(key_id)
            if current is None:
                return
            logger.info(f"timer triggered after {interval}s for action id: {key_id}")
            self._on_tick(current)

        return self._scheduler.call_repeating(interval, tick)

    @staticmethod
    def _cancel_timer(entry: TrackedEntry) -> None:
        if entry.timer is not None:
            entry.timer.cancel()
            entry.timer = None
