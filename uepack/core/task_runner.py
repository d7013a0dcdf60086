import queue
import subprocess
import threading
from typing import Callable, List, Mapping, Optional

from PySide6.QtCore import QObject, Signal

_EOF = object()


class TaskRunner(QObject):
    """Blocking subprocess runner with streamed output.

    ``started`` fires once the child is spawned and ``finished`` carries its
    exit code after the last output line was handled. One child at a time.
    """

    started = Signal()
    finished = Signal(int)

    def __init__(self) -> None:
        super().__init__()
        self._proc: Optional[subprocess.Popen] = None

    def run(
        self,
        argv: List[str],
        on_stdout: Callable[[str], None],
        on_stderr: Callable[[str], None],
        env: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Launch a subprocess, stream its output and return its exit code.

        Parameters
        ----------
        argv
            Program and arguments, never run through a shell.
        on_stdout
            Receives each ``stdout`` line without its line ending.
        on_stderr
            Receives each ``stderr`` line without its line ending.
        env
            Complete environment for the child; ``None`` inherits ours.

        Threading
        ---------
        Each stream is pumped on a daemon thread that only pushes lines into
        a shared queue. The calling thread drains the queue and invokes the
        callbacks, so callbacks never run concurrently. The exit code is
        collected only after both streams reached EOF, which means every
        callback has returned before :pyattr:`finished` is emitted.

        Raises
        ------
        RuntimeError
            If a child is still running.
        OSError
            If the executable cannot be launched.
        """
        if self._proc:
            raise RuntimeError("A process is already running")

        self._proc = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=dict(env) if env is not None else None,
            shell=False,
        )
        self.started.emit()

        lines: queue.Queue = queue.Queue()

        def pump(stream, cb):
            assert stream is not None
            for line in iter(stream.readline, ""):
                lines.put((cb, line.rstrip("\r\n")))
            stream.close()
            lines.put((None, _EOF))

        threading.Thread(
            target=pump, args=(self._proc.stdout, on_stdout), daemon=True
        ).start()
        threading.Thread(
            target=pump, args=(self._proc.stderr, on_stderr), daemon=True
        ).start()

        open_streams = 2
        try:
            while open_streams:
                cb, line = lines.get()
                if line is _EOF:
                    open_streams -= 1
                else:
                    cb(line)
            code = self._proc.wait()
        finally:
            self._proc = None
        self.finished.emit(code)
        return code
