"""Image assets shown on keys, grouped per key kind."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KeyImages:
    """Named image assets for one kind of key."""

    idle: str  # Shown after a normal output chunk with no configured match
    failure: str  # Shown when the script writes to stderr
    venv: Optional[str] = None  # Shown when a venv is configured (script keys)
    running: Optional[str] = None  # Service toggle key, service started
    stopped: Optional[str] = None  # Service toggle key, service stopped


SERVICE_IMAGES = KeyImages(
    idle="imgs/actions/pyServiceIcon.png",
    failure="imgs/actions/pyServiceIconFail.png",
    running="imgs/actions/pyServiceRunning.png",
    stopped="imgs/actions/pyServiceStopped.png",
)

SCRIPT_IMAGES = KeyImages(
    idle="imgs/actions/gemini_icons/pyFileLoaded.png",
    failure="imgs/actions/pyFilecheckFailed.png",
    venv="imgs/actions/gemini_icons/pyVirtEnvActive.png",
)
