"""Logging configuration for the plugin process."""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(name)s - %(message)s"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Install a Rich handler on the root logger.

    Calling it again leaves existing handlers in place and only adjusts the
    level.

    Args:
        verbose: Log debug messages (paths, exit codes)
        no_color: Disable colors in log output
    """
    root = logging.getLogger()
    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)

    if root.handlers:
        return

    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
