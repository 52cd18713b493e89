"""ScriptDeck - key deck plugin running Python scripts per press or on a timer."""

__version__ = "0.1.0"

from .actions import KeyEvent, ScriptAction, ServiceAction
from .display import KeyDisplay, SetImage, SetTitle, ShowAlert
from .plugin import ScriptDeckPlugin
from .registry import ServiceRegistry, ServiceState, TrackedEntry
from .settings import KeySettings

__all__ = [
    "KeyDisplay",
    "KeyEvent",
    "KeySettings",
    "ScriptAction",
    "ScriptDeckPlugin",
    "ServiceAction",
    "ServiceRegistry",
    "ServiceState",
    "SetImage",
    "SetTitle",
    "ShowAlert",
    "TrackedEntry",
]
