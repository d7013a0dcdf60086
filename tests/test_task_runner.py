import os
import sys

import pytest

pytest.importorskip("PySide6")

from uepack.core.task_runner import TaskRunner


def test_streams_both_outputs_and_returns_code() -> None:
    runner = TaskRunner()
    out: list[str] = []
    err: list[str] = []
    codes: list[int] = []
    runner.finished.connect(lambda c: codes.append(c))
    code = runner.run(
        [
            sys.executable,
            "-c",
            "import sys; print('one'); print('two'); print('bad', file=sys.stderr); sys.exit(2)",
        ],
        on_stdout=out.append,
        on_stderr=err.append,
    )
    assert code == 2
    assert out == ["one", "two"]
    assert err == ["bad"]
    assert codes == [2]


def test_env_is_passed_to_child() -> None:
    out: list[str] = []
    TaskRunner().run(
        [sys.executable, "-c", "import os; print(os.environ['UEPACK_X'])"],
        on_stdout=out.append,
        on_stderr=lambda _line: None,
        env={**os.environ, "UEPACK_X": "42"},
    )
    assert out == ["42"]


def test_missing_executable_raises_oserror() -> None:
    runner = TaskRunner()
    with pytest.raises(OSError):
        runner.run(["/definitely/not/here"], print, print)
    # a failed launch does not leave the runner busy
    code = runner.run([sys.executable, "-c", "pass"], print, print)
    assert code == 0
