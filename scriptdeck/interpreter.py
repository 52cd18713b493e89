"""Interpreter resolution for key scripts."""

import logging
import ntpath
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import KeySettings


logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


@dataclass(frozen=True)
class Invocation:
    """A child process request: executable, arguments and window handling."""

    executable: str
    args: tuple[str, ...]
    hide_window: bool = False

    @property
    def command(self) -> list[str]:
        """Full command line as a list."""
        return [self.executable, *self.args]


def normalize_venv_path(venv_path: str) -> str:
    """Resolve a virtual environment path to its directory.

    Users may point at the environment's marker file (pyvenv.cfg) instead of
    the directory. A path to an existing regular file resolves to its parent
    directory; anything else, including paths that do not exist yet, is
    returned as-is.
    """
    try:
        candidate = Path(venv_path)
        if candidate.exists() and candidate.is_file():
            return str(candidate.parent)
    except OSError as e:
        logger.warning(f"Could not check venv path: {e}")
    return venv_path


def venv_interpreter(venv_dir: str, is_windows: bool = IS_WINDOWS) -> str:
    """Interpreter binary inside a virtual environment directory."""
    if is_windows:
        return ntpath.join(venv_dir, "Scripts", "python.exe")
    return os.path.join(venv_dir, "bin", "python3")


def system_interpreter(is_windows: bool = IS_WINDOWS) -> str:
    """Interpreter name looked up through PATH when no venv is used."""
    return "python" if is_windows else "python3"


def normalize_script_path(script_path: str, is_windows: bool = IS_WINDOWS) -> str:
    """Rewrite the script path to the platform's separator convention."""
    if is_windows:
        return ntpath.normpath(script_path)
    return script_path


def resolve_interpreter(settings: KeySettings, is_windows: bool = IS_WINDOWS) -> str:
    """Interpreter executable for a key's settings."""
    venv: Optional[str] = settings.venv
    if venv:
        venv_dir = normalize_venv_path(venv)
        logger.info(f"Using virtual environment at: {venv_dir}")
        return venv_interpreter(venv_dir, is_windows)
    return system_interpreter(is_windows)


def build_invocation(settings: KeySettings, is_windows: bool = IS_WINDOWS) -> Optional[Invocation]:
    """Build the child process request for a key.

    Args:
        settings: Settings of the key
        is_windows: Target platform, defaults to the running one

    Returns:
        The invocation, or None when no script path is configured
    """
    if not settings.path:
        return None
    return Invocation(
        executable=resolve_interpreter(settings, is_windows),
        args=(normalize_script_path(settings.path, is_windows),),
        hide_window=is_windows,
    )
