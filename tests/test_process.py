"""Tests running real child processes and timers on an asyncio loop."""

import asyncio
import sys
from pathlib import Path

from scriptdeck.actions import KeyEvent
from scriptdeck.images import SCRIPT_IMAGES
from scriptdeck.interpreter import Invocation
from scriptdeck.plugin import ScriptDeckPlugin
from scriptdeck.process import ProcessHandlers, ProcessLauncher
from scriptdeck.scheduler import LoopScheduler
from tests.conftest import RecordingDisplay, write_script


class Recorder:
    """Collects ProcessHandlers callbacks."""

    def __init__(self):
        self.stdout: list[str] = []
        self.stderr: list[str] = []
        self.exit_codes: list = []
        self.errors: list[OSError] = []

    def handlers(self) -> ProcessHandlers:
        return ProcessHandlers(
            on_stdout=self.stdout.append,
            on_stderr=self.stderr.append,
            on_close=self.exit_codes.append,
            on_error=self.errors.append,
        )


def run_child(invocation: Invocation, recorder: Recorder) -> None:
    async def main() -> None:
        launcher = ProcessLauncher()
        launcher.launch(invocation, recorder.handlers())
        await launcher.drain()
        assert launcher.pending == 0

    asyncio.run(main())


def test_stdout_and_exit_code(tmp_path: Path) -> None:
    script = write_script(tmp_path, "hello.py", "print('hello')\n")
    recorder = Recorder()

    run_child(Invocation(sys.executable, (str(script),)), recorder)

    assert "".join(recorder.stdout).strip() == "hello"
    assert recorder.stderr == []
    assert recorder.exit_codes == [0]
    assert recorder.errors == []


def test_stderr_and_failing_exit_code(tmp_path: Path) -> None:
    script = write_script(tmp_path, "boom.py", "1 / 0\n")
    recorder = Recorder()

    run_child(Invocation(sys.executable, (str(script),)), recorder)

    assert "ZeroDivisionError" in "".join(recorder.stderr)
    assert recorder.exit_codes == [1]


def test_spawn_failure_is_reported_not_raised(tmp_path: Path) -> None:
    recorder = Recorder()

    run_child(Invocation(str(tmp_path / "no-such-python"), ("x.py",)), recorder)

    assert len(recorder.errors) == 1
    assert isinstance(recorder.errors[0], OSError)
    assert recorder.exit_codes == []


def test_failing_output_handler_does_not_stop_the_child(tmp_path: Path) -> None:
    script = write_script(tmp_path, "many.py", "for i in range(3):\n    print(i, flush=True)\n")
    exit_codes: list = []

    def explode(_chunk: str) -> None:
        raise RuntimeError("display went away")

    async def main() -> None:
        launcher = ProcessLauncher()
        launcher.launch(
            Invocation(sys.executable, (str(script),)),
            ProcessHandlers(on_stdout=explode, on_close=exit_codes.append),
        )
        await launcher.drain()

    asyncio.run(main())

    assert exit_codes == [0]


def test_loop_scheduler_repeats_until_cancelled() -> None:
    fired: list[float] = []

    async def main() -> None:
        loop = asyncio.get_running_loop()
        timer = LoopScheduler().call_repeating(0.05, lambda: fired.append(loop.time()))
        await asyncio.sleep(0.28)
        timer.cancel()
        count = len(fired)
        await asyncio.sleep(0.15)
        assert len(fired) == count
        assert timer.cancelled

    asyncio.run(main())

    assert len(fired) >= 2


def test_script_key_runs_through_venv(tmp_path: Path, fake_venv: Path) -> None:
    script = write_script(tmp_path, "flag.py", "import sys\nsys.stdout.write('on\\n')\n")
    display = RecordingDisplay()
    payload = {
        "path": str(script),
        "useVenv": True,
        "venvPath": str(fake_venv),
        "displayValues": True,
        "value1": "on",
        "image1": "imgs/on.png",
    }

    async def main() -> None:
        plugin = ScriptDeckPlugin(display)
        plugin.script.on_key_down(KeyEvent.from_payload("k1", payload))
        await plugin.launcher.drain()
        plugin.shutdown()

    asyncio.run(main())

    assert display.titles("k1") == ["on"]
    assert display.images("k1") == ["imgs/on.png"]


def test_script_error_classified_end_to_end(tmp_path: Path, fake_venv: Path) -> None:
    script = write_script(tmp_path, "bad.py", "import sys\nsys.stderr.write('KeyError: missing')\n")
    display = RecordingDisplay()
    payload = {"path": str(script), "useVenv": True, "venvPath": str(fake_venv)}

    async def main() -> None:
        plugin = ScriptDeckPlugin(display)
        plugin.script.on_key_down(KeyEvent.from_payload("k1", payload))
        await plugin.launcher.drain()

    asyncio.run(main())

    assert display.images("k1") == [SCRIPT_IMAGES.failure]
    assert display.titles("k1") == ["Python\nKey\nError"]
    assert display.alerts("k1") == 1


def test_service_ticks_on_real_loop(tmp_path: Path, fake_venv: Path) -> None:
    script = write_script(tmp_path, "tick.py", "import sys\nsys.stdout.write('tick\\n')\n")
    display = RecordingDisplay()
    payload = {"path": str(script), "interval": "0.1", "useVenv": True, "venvPath": str(fake_venv), "displayValues": True}

    async def main() -> None:
        plugin = ScriptDeckPlugin(display, scheduler=LoopScheduler())
        event = KeyEvent.from_payload("k1", payload)
        plugin.service.on_will_appear(event)
        plugin.service.on_key_down(event)
        await asyncio.sleep(0.35)
        plugin.service.on_key_down(event)
        await plugin.launcher.drain()

    asyncio.run(main())

    assert display.titles("k1").count("tick") >= 2
