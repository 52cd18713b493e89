"""Child process facility on the asyncio event loop.

Spawning returns immediately; stdout/stderr chunks, exit and spawn failure
are delivered to callbacks on the loop thread.
"""

import asyncio
import codecs
import logging
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional

from .interpreter import Invocation


logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096


def _no_window_creationflags() -> int:
    """Creation flag that suppresses the console window (Windows only)."""
    return int(getattr(subprocess, "CREATE_NO_WINDOW", 0))


def _noop(*_args) -> None:
    pass


@dataclass
class ProcessHandlers:
    """Callbacks for one child process."""

    on_stdout: Callable[[str], None] = _noop
    on_stderr: Callable[[str], None] = _noop
    on_close: Callable[[Optional[int]], None] = _noop
    on_error: Callable[[OSError], None] = _noop


class ProcessLauncher:
    """Spawns child processes as tasks on the running event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of children still being supervised."""
        return len(self._pending)

    def launch(self, invocation: Invocation, handlers: ProcessHandlers) -> asyncio.Task:
        """Schedule a child process and return without waiting for it.

        Args:
            invocation: Executable and arguments to run
            handlers: Callbacks for output, exit and spawn failure

        Returns:
            The supervising task
        """
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._supervise(invocation, handlers))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait until every launched child has exited."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _supervise(self, invocation: Invocation, handlers: ProcessHandlers) -> Optional[int]:
        kwargs = {}
        if invocation.hide_window:
            kwargs["creationflags"] = _no_window_creationflags()

        try:
            process = await asyncio.create_subprocess_exec(
                invocation.executable,
                *invocation.args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **kwargs,
            )
        except OSError as e:
            logger.error(f"Failed to start python process: {e}")
            handlers.on_error(e)
            return None

        await asyncio.gather(
            self._pump(process.stdout, handlers.on_stdout),
            self._pump(process.stderr, handlers.on_stderr),
        )
        returncode = await process.wait()
        logger.debug(f"child process exited with code {returncode}")
        handlers.on_close(returncode)
        return returncode

    async def _pump(self, stream: Optional[asyncio.StreamReader], callback: Callable[[str], None]) -> None:
        """Forward decoded chunks of a pipe to a callback until EOF."""
        if stream is None:
            return
        # Incremental decoding keeps multi-byte characters split across reads intact
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = await stream.read(READ_CHUNK_SIZE)
            if not data:
                tail = decoder.decode(b"", final=True)
                if tail:
                    self._deliver(callback, tail)
                return
            text = decoder.decode(data)
            if text:
                self._deliver(callback, text)

    @staticmethod
    def _deliver(callback: Callable[[str], None], text: str) -> None:
        try:
            callback(text)
        except Exception:
            # The pipe must keep draining or the child blocks on a full buffer
            logger.exception("output handler failed")
