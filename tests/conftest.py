"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

from scriptdeck.display import Command, KeyDisplay, SetImage, SetTitle, ShowAlert
from scriptdeck.interpreter import Invocation
from scriptdeck.process import ProcessHandlers
from scriptdeck.scheduler import Scheduler, TimerHandle


class ManualTimer(TimerHandle):
    """Repeating timer driven by ManualScheduler's simulated clock."""

    def __init__(self, interval: float, callback: Callable[[], None], due: float):
        self.interval = interval
        self.callback = callback
        self.due = due
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler with a simulated clock advanced explicitly by tests."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_repeating(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, callback, due=self.now + interval)
        self.timers.append(timer)
        return timer

    @property
    def live_timers(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers in time order."""
        target = self.now + seconds
        while True:
            due = [timer for timer in self.live_timers if timer.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            timer.due += timer.interval
            timer.callback()
        self.now = target


class RecordingDisplay(KeyDisplay):
    """KeyDisplay recording every command it receives."""

    def __init__(self):
        self.commands: list[Command] = []

    def set_title(self, key_id: str, title: str) -> None:
        self.commands.append(SetTitle(key_id, title))

    def set_image(self, key_id: str, image: str) -> None:
        self.commands.append(SetImage(key_id, image))

    def show_alert(self, key_id: str) -> None:
        self.commands.append(ShowAlert(key_id))

    def titles(self, key_id: str) -> list[str]:
        return [c.title for c in self.commands if isinstance(c, SetTitle) and c.key_id == key_id]

    def images(self, key_id: str) -> list[str]:
        return [c.image for c in self.commands if isinstance(c, SetImage) and c.key_id == key_id]

    def alerts(self, key_id: str) -> int:
        return sum(1 for c in self.commands if isinstance(c, ShowAlert) and c.key_id == key_id)

    def clear(self) -> None:
        self.commands.clear()


class FakeLauncher:
    """Records launch requests instead of spawning processes."""

    def __init__(self):
        self.launches: list[tuple[Invocation, ProcessHandlers]] = []

    @property
    def pending(self) -> int:
        return 0

    def launch(self, invocation: Invocation, handlers: ProcessHandlers) -> None:
        self.launches.append((invocation, handlers))

    async def drain(self) -> None:
        pass

    @property
    def last(self) -> tuple[Invocation, ProcessHandlers]:
        return self.launches[-1]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def fake_venv(tmp_path: Path) -> Path:
    """A venv-shaped directory whose bin/python3 is the running interpreter.

    Lets tests spawn real children through the venv code path without
    depending on a python3 on PATH.
    """
    if os.name == "nt":
        pytest.skip("venv layout symlink is POSIX only")
    venv_dir = tmp_path / "venv"
    bin_dir = venv_dir / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "python3").symlink_to(Path(sys.executable).resolve())
    return venv_dir


def write_script(directory: Path, name: str, body: str) -> Path:
    """Write a Python script into a directory and return its path."""
    path = directory / name
    path.write_text(body)
    return path