"""Execution of a key's script and routing of its output to the key."""

import asyncio
import logging
from typing import Callable, Optional

from .display import Command, KeyDisplay
from .images import KeyImages
from .interpreter import IS_WINDOWS, build_invocation
from .process import ProcessHandlers, ProcessLauncher
from .routing import route_stderr, route_stdout
from .settings import KeySettings


logger = logging.getLogger(__name__)

LivenessCheck = Callable[[], bool]


def _always_live() -> bool:
    return True


class ScriptExecutor:
    """Spawns key scripts and applies their output to the display."""

    def __init__(
        self,
        launcher: ProcessLauncher,
        display: KeyDisplay,
        is_windows: bool = IS_WINDOWS,
    ):
        self._launcher = launcher
        self._display = display
        self._is_windows = is_windows

    def execute(
        self,
        key_id: str,
        settings: KeySettings,
        images: KeyImages,
        is_live: LivenessCheck = _always_live,
    ) -> Optional[asyncio.Task]:
        """Run the key's script once without waiting for it.

        Args:
            key_id: Key the output is routed to
            settings: Settings snapshot to run with
            images: Image set of the key kind
            is_live: Checked before every display update; output arriving
                after it turns False is dropped

        Returns:
            Task supervising the child, or None when no script is configured
        """
        invocation = build_invocation(settings, self._is_windows)
        if invocation is None:
            return None
        logger.debug(f"path to script is: {settings.path}")

        def apply(commands: list[Command]) -> None:
            if not is_live():
                logger.debug(f"dropping output for key {key_id}: no longer tracked")
                return
            self._display.apply_all(commands)

        handlers = ProcessHandlers(
            on_stdout=lambda chunk: apply(route_stdout(key_id, settings, chunk, images)),
            on_stderr=lambda chunk: apply(route_stderr(key_id, chunk, images)),
        )
        return self._launcher.launch(invocation, handlers)
