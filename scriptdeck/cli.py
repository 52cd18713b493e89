"""Command-line interface for ScriptDeck."""

import argparse
import asyncio
from typing import Any, Optional

from .actions import KeyEvent
from .cli_builder import build_arg_parser
from .console import ConsoleDisplay, OutputFormatter
from .logging_setup import setup_logging
from .plugin import ScriptDeckPlugin
from .settings import parse_interval


class CLIError(ValueError):
    """Raised when command-line input cannot drive a key."""


def build_payload(args: argparse.Namespace) -> dict[str, Any]:
    """Host-style settings payload from parsed arguments."""
    payload: dict[str, Any] = {
        "path": args.script,
        "interval": args.interval,
        "displayValues": args.display_values,
    }
    if args.venv:
        payload["useVenv"] = True
        payload["venvPath"] = args.venv
    for index in (1, 2):
        value = getattr(args, f"value{index}")
        image = getattr(args, f"image{index}")
        if value is not None:
            payload[f"value{index}"] = value
        if image is not None:
            payload[f"image{index}"] = image
    return payload


def service_duration(args: argparse.Namespace) -> float:
    """Seconds the background service runs before the key is pressed again.

    Raises:
        CLIError: If the interval or the duration is not a positive number
    """
    interval = parse_interval(args.interval)
    if interval is None:
        raise CLIError(f"Invalid interval '{args.interval}': expected a positive number of seconds")
    if args.duration is None:
        return interval * 2.5
    if args.duration <= 0:
        raise CLIError(f"Invalid duration '{args.duration}': expected a positive number of seconds")
    return args.duration


class CLI:
    """Command-line interface for ScriptDeck."""

    def __init__(self):
        self.parser = build_arg_parser()

    def run(self, argv: Optional[list[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code
        """
        args = self.parser.parse_args(argv)
        setup_logging(verbose=args.verbose, no_color=args.no_color)
        output = OutputFormatter(no_color=args.no_color)

        try:
            event = KeyEvent.from_payload(args.key_id, build_payload(args))
            if args.once:
                asyncio.run(self._press_once(event, output))
            else:
                duration = service_duration(args)
                asyncio.run(self._run_service(event, duration, output))
            return 0
        except CLIError as e:
            output.print_error(str(e))
            return 1
        except KeyboardInterrupt:
            output.print_error("Interrupted")
            return 130

    async def _press_once(self, event: KeyEvent, output: OutputFormatter) -> None:
        plugin = ScriptDeckPlugin(ConsoleDisplay(output))
        plugin.script.on_will_appear(event)
        output.print(f"{output.symbols.Play} [dim]press:[/dim] [bold cyan]{event.key_id}[/bold cyan]")
        plugin.script.on_key_down(event)
        await plugin.launcher.drain()
        plugin.shutdown()

    async def _run_service(self, event: KeyEvent, duration: float, output: OutputFormatter) -> None:
        plugin = ScriptDeckPlugin(ConsoleDisplay(output))
        plugin.service.on_will_appear(event)

        sym = output.symbols
        output.print(f"{sym.Play} [dim]start service for[/dim] [bold cyan]{duration:g}s[/bold cyan]")
        plugin.service.on_key_down(event)
        try:
            await asyncio.sleep(duration)
        finally:
            if plugin.registry.is_running:
                output.print(f"{sym.Stop} [dim]stop service[/dim]")
                plugin.service.on_key_down(event)
            await plugin.launcher.drain()
            plugin.shutdown()


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point of the scriptdeck command."""
    return CLI().run(argv)
