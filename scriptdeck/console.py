"""Terminal rendering of key updates with Rich console and emoji support.

Used by the command-line harness in place of the host's key surface.

Usage:
    output = OutputFormatter(no_color=False)
    display = ConsoleDisplay(output)
    display.set_title("key-1", "42")
"""

import platform
import sys
from dataclasses import dataclass
from functools import cached_property
from typing import Union

from rich.console import Console
from rich.text import Text

from .display import KeyDisplay


@dataclass(frozen=True)
class Symbol:
    """A symbol with emoji and ASCII fallback."""

    emoji: str
    ascii: str


class Symbols:
    """Symbol definitions as class attributes."""

    Check = Symbol("✅", "+")
    Cross = Symbol("❌", "x")
    Warning = Symbol("⚠️", "!")
    Bell = Symbol("🔔", "!")
    Image = Symbol("🖼️", "#")
    Title = Symbol("🏷️", ">")
    Play = Symbol("▶️", ">")
    Stop = Symbol("⏹️", "|")


class SymbolsFormatter:
    """Provides symbols with automatic emoji/ASCII fallback based on terminal support.

    Emoji is disabled when no_color=True or when the terminal doesn't support it.
    """

    def __init__(self, no_color: bool = False):
        self._no_color = no_color

    @cached_property
    def supports_emoji(self) -> bool:
        """Detect if terminal supports emoji display."""
        if self._no_color:
            return False

        if platform.system() == "Windows":
            return False

        if not hasattr(sys.stdout, "encoding") or sys.stdout.encoding is None:
            return False

        encoding = sys.stdout.encoding.lower()
        return any(enc in encoding for enc in ("utf-8", "utf8", "utf-16", "utf16"))

    def get(self, symbol: Symbol) -> str:
        """Emoji or ASCII string based on terminal support."""
        return symbol.emoji if self.supports_emoji else symbol.ascii

    def __getattr__(self, name: str) -> str:
        symbol = getattr(Symbols, name, None)
        if not isinstance(symbol, Symbol):
            raise AttributeError(name)
        return self.get(symbol)


class OutputFormatter:
    """Handles formatted output using Rich console with emoji support detection."""

    def __init__(self, no_color: bool = False):
        """Initialize output formatter.

        Args:
            no_color: If True, disable all colors and styling
        """
        self._console = Console(
            no_color=no_color,
            force_terminal=None,
            highlight=False,
        )
        self._error_console = Console(
            stderr=True,
            no_color=no_color,
            force_terminal=None,
            highlight=False,
        )
        self._symbols = SymbolsFormatter(no_color=no_color)

    @property
    def symbols(self) -> SymbolsFormatter:
        """Get the symbols formatter for emoji/ASCII symbol access."""
        return self._symbols

    def print(self, message: Union[str, Text]) -> None:
        """Print message using Rich console."""
        self._console.print(message, highlight=False)

    def print_error(self, message: str) -> None:
        """Print an error line to stderr."""
        line = Text()
        line.append(f"{self._symbols.Cross} ", style="red")
        line.append("Error: ", style="bold red")
        line.append(message)
        self._error_console.print(line, highlight=False)


def one_line(text: str) -> str:
    """Key titles are multi-line; show them on a single terminal line."""
    return " / ".join(part.strip() for part in text.splitlines()) or "''"


class ConsoleDisplay(KeyDisplay):
    """KeyDisplay printing every key update to the terminal."""

    def __init__(self, output: OutputFormatter):
        self._output = output

    def _line(self, symbol: str, key_id: str, label: str, value: str, style: str) -> Text:
        line = Text()
        line.append(f"{symbol} ")
        line.append(key_id, style="bold cyan")
        line.append(f" {label}: ", style="dim")
        line.append(value, style=style)
        return line

    def set_title(self, key_id: str, title: str) -> None:
        sym = self._output.symbols
        self._output.print(self._line(sym.Title, key_id, "title", one_line(title), "bold"))

    def set_image(self, key_id: str, image: str) -> None:
        sym = self._output.symbols
        self._output.print(self._line(sym.Image, key_id, "image", image, "green"))

    def show_alert(self, key_id: str) -> None:
        sym = self._output.symbols
        self._output.print(self._line(sym.Bell, key_id, "alert", "!", "bold red"))
