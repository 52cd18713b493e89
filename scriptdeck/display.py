"""Host display adapter and the commands issued to it.

Routing and presentation code returns commands as plain data. A KeyDisplay
implementation (the host SDK bridge, the console harness, a test recorder)
executes them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Union


@dataclass(frozen=True)
class SetTitle:
    """Set the title text of a key."""

    key_id: str
    title: str


@dataclass(frozen=True)
class SetImage:
    """Set the image of a key from a named asset."""

    key_id: str
    image: str


@dataclass(frozen=True)
class ShowAlert:
    """Flash the host's alert indicator on a key."""

    key_id: str


Command = Union[SetTitle, SetImage, ShowAlert]


class KeyDisplay(ABC):
    """Abstract base class for the host's key rendering surface."""

    @abstractmethod
    def set_title(self, key_id: str, title: str) -> None:
        """Set the title text of a key.

        Args:
            key_id: Identifier of the key instance
            title: Title text, may contain line breaks
        """
        pass

    @abstractmethod
    def set_image(self, key_id: str, image: str) -> None:
        """Set the image of a key.

        Args:
            key_id: Identifier of the key instance
            image: Asset path of the image
        """
        pass

    @abstractmethod
    def show_alert(self, key_id: str) -> None:
        """Trigger the alert indicator of a key."""
        pass

    def apply(self, command: Command) -> None:
        """Execute a single command."""
        if isinstance(command, SetTitle):
            self.set_title(command.key_id, command.title)
        elif isinstance(command, SetImage):
            self.set_image(command.key_id, command.image)
        elif isinstance(command, ShowAlert):
            self.show_alert(command.key_id)
        else:
            raise TypeError(f"Unknown display command: {command!r}")

    def apply_all(self, commands: Iterable[Command]) -> None:
        """Execute commands in order."""
        for command in commands:
            self.apply(command)
