"""Translation of script output chunks into key display commands."""

import logging

from .diagnostics import OTHER_ISSUE_LABEL, classify_error, collapse_newlines
from .display import Command, SetImage, SetTitle, ShowAlert
from .images import KeyImages
from .settings import KeySettings


logger = logging.getLogger(__name__)


def match_image(settings: KeySettings, output: str) -> str | None:
    """Image configured for an output value, checking both pairs in order."""
    if settings.image1 and output == (settings.value1 or ""):
        return settings.image1
    if settings.image2 and output == (settings.value2 or ""):
        return settings.image2
    return None


def route_stdout(
    key_id: str, settings: KeySettings, chunk: str, images: KeyImages
) -> list[Command]:
    """Commands for one chunk of standard output.

    Mirroring the text as title and picking the image are independent, both
    apply to the same chunk.

    Args:
        key_id: Key the output belongs to
        settings: Settings snapshot the process was spawned with
        chunk: Decoded output chunk
        images: Image set of the key kind

    Returns:
        Commands to apply, in order
    """
    output = chunk.strip()
    logger.info(f"stdout: {output}")

    commands: list[Command] = []
    if settings.display_values:
        commands.append(SetTitle(key_id, output))
    commands.append(SetImage(key_id, match_image(settings, output) or images.idle))
    return commands


def route_stderr(key_id: str, chunk: str, images: KeyImages) -> list[Command]:
    """Commands for one chunk of standard error.

    Args:
        key_id: Key the output belongs to
        chunk: Decoded error chunk
        images: Image set of the key kind

    Returns:
        Failure image, classified title and alert
    """
    message = collapse_newlines(chunk)
    logger.error(f"stderr: {message}")

    title = classify_error(message)
    if title == OTHER_ISSUE_LABEL:
        logger.error(message)

    return [
        SetImage(key_id, images.failure),
        SetTitle(key_id, title),
        ShowAlert(key_id),
    ]
