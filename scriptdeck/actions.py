"""Key-lifecycle handlers for the service key and the script key."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Optional

from .display import Command, KeyDisplay, SetImage, SetTitle, ShowAlert
from .executor import ScriptExecutor
from .images import SCRIPT_IMAGES, SERVICE_IMAGES, KeyImages
from .interpreter import normalize_venv_path
from .registry import ServiceRegistry, ServiceState
from .settings import KeySettings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    """A host event for one key instance."""

    key_id: str
    settings: KeySettings = field(default_factory=KeySettings)

    @classmethod
    def from_payload(cls, key_id: str, payload: Optional[dict[str, Any]]) -> "KeyEvent":
        return cls(key_id, KeySettings.from_payload(payload))


def script_file_name(path: str) -> str:
    """File name of a script: everything after the last forward slash."""
    return path[path.rfind("/") + 1:]


def key_title(settings: KeySettings) -> str:
    """Title showing the script name, prefixed with the venv name if used."""
    prefix = ""
    if settings.venv:
        venv_dir = normalize_venv_path(settings.venv)
        logger.info(f"Normalized venv path: {venv_dir}")
        prefix = f"venv:\n {PurePath(venv_dir).name}\n"
    return f"{prefix}{script_file_name(settings.path or '')}"


def presentation(key_id: str, settings: KeySettings, image: str) -> list[Command]:
    """Image and title for a key whose path names a Python script."""
    if not settings.path or ".py" not in settings.path:
        return []
    return [SetImage(key_id, image), SetTitle(key_id, key_title(settings))]


class ServiceAction:
    """Keys running their script repeatedly while the background service runs.

    Pressing any service key toggles the shared service.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        display: KeyDisplay,
        images: KeyImages = SERVICE_IMAGES,
    ):
        self._registry = registry
        self._display = display
        self._images = images

    def on_will_appear(self, ev: KeyEvent) -> None:
        self._display.apply_all(presentation(ev.key_id, ev.settings, self._images.idle))
        if ev.settings.is_complete():
            logger.info("settings complete")
            self._registry.register(ev.key_id, ev.settings)

    def on_did_receive_settings(self, ev: KeyEvent) -> None:
        self._display.apply_all(presentation(ev.key_id, ev.settings, self._images.idle))
        self._registry.register(ev.key_id, ev.settings)

    def on_will_disappear(self, ev: KeyEvent) -> None:
        logger.info(f"key {ev.key_id} disappeared - unregister action")
        self._registry.unregister(ev.key_id)

    def on_key_down(self, ev: KeyEvent) -> None:
        """Toggle the service: stop if running, otherwise start if configured."""
        if self._registry.state is ServiceState.RUNNING:
            self._registry.stop()
            logger.info(f"stopping execution of the action id: {ev.key_id}")
            self._display.apply(SetImage(ev.key_id, self._images.stopped or self._images.idle))
            return

        if not ev.settings.is_complete():
            logger.warning("Cannot start background service - incomplete settings")
            self._display.apply(ShowAlert(ev.key_id))
            return

        self._registry.start()
        self._display.apply(SetImage(ev.key_id, self._images.running or self._images.idle))


class ScriptAction:
    """Keys running their script once per press."""

    def __init__(
        self,
        executor: ScriptExecutor,
        display: KeyDisplay,
        images: KeyImages = SCRIPT_IMAGES,
    ):
        self._executor = executor
        self._display = display
        self._images = images

    def on_will_appear(self, ev: KeyEvent) -> None:
        self._display.apply_all(presentation(ev.key_id, ev.settings, self._images.idle))

    def on_did_receive_settings(self, ev: KeyEvent) -> None:
        image = self._images.venv if ev.settings.venv and self._images.venv else self._images.idle
        self._display.apply_all(presentation(ev.key_id, ev.settings, image))

    def on_key_down(self, ev: KeyEvent) -> Optional[asyncio.Task]:
        """Run the script once; returns the supervising task, if any."""
        return self._executor.execute(ev.key_id, ev.settings, self._images)
