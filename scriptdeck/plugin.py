"""Plugin composition root.

Created once when the plugin process starts and shut down explicitly when it
exits. The host bridge routes events to `service` and `script`.
"""

import logging
from functools import partial
from typing import Optional

from .actions import ScriptAction, ServiceAction
from .display import KeyDisplay
from .executor import ScriptExecutor
from .images import SERVICE_IMAGES
from .interpreter import IS_WINDOWS
from .process import ProcessLauncher
from .registry import ServiceRegistry, TrackedEntry
from .scheduler import LoopScheduler, Scheduler


logger = logging.getLogger(__name__)


class ScriptDeckPlugin:
    """Owns the service registry, the executor and the key actions."""

    def __init__(
        self,
        display: KeyDisplay,
        scheduler: Optional[Scheduler] = None,
        launcher: Optional[ProcessLauncher] = None,
        is_windows: bool = IS_WINDOWS,
    ):
        self.display = display
        self.launcher = launcher or ProcessLauncher()
        self.executor = ScriptExecutor(self.launcher, display, is_windows=is_windows)
        self.registry = ServiceRegistry(scheduler or LoopScheduler(), on_tick=self._run_tick)
        self.service = ServiceAction(self.registry, display)
        self.script = ScriptAction(self.executor, display)

    def _run_tick(self, entry: TrackedEntry) -> None:
        # Tag output with the entry's generation so a key removed meanwhile is left alone
        is_live = partial(self.registry.is_current, entry.key_id, entry.generation)
        self.executor.execute(entry.key_id, entry.settings, SERVICE_IMAGES, is_live=is_live)

    def shutdown(self) -> None:
        """Disarm all timers. Children already running finish on their own."""
        if self.registry.is_running:
            self.registry.stop()
        logger.debug(f"plugin shut down with {self.launcher.pending} child process(es) running")
