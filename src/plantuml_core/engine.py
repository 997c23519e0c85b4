"""
Engine adapters.

The executor only ever talks to :class:`EngineAdapter`: bytes in, exit status
plus captured streams out. :class:`SubprocessEngine` is the real adapter, one
``java -jar plantuml.jar`` process per call.
"""

import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import EngineConfig
from .errors import EngineUnavailable, OutputTooLarge, RenderTimeout

logger = logging.getLogger(__name__)

# java prints this and exits non-zero when the jar path is wrong
_MISSING_JAR_MARKER = "Unable to access jarfile"

CHUNK_SIZE = 64 * 1024
# how long to wait for pipe threads once the process is gone
_JOIN_TIMEOUT_SECONDS = 5.0


@dataclass
class EngineOutput:
    """Raw outcome of one engine invocation.

    ``truncated`` is set when stdout went past the output cap; ``stdout`` then
    holds only the first ``max_output_bytes`` and ``stdout_total`` the number
    of bytes the engine actually wrote.
    """
    returncode: int
    stdout: bytes
    stderr: bytes
    truncated: bool = False
    stdout_total: Optional[int] = None

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


class EngineAdapter(ABC):
    """Interface for anything that can run the rendering engine."""

    @abstractmethod
    def invoke(self, input_bytes: bytes, format_flag: str) -> EngineOutput:
        """Run the engine once on ``input_bytes`` with the given format flag."""


class _BoundedBuffer:
    """Collects a stream, keeping at most ``limit`` bytes."""

    def __init__(self, limit: int):
        self.limit = limit
        self.total = 0
        self._chunks: List[bytes] = []
        self._kept = 0

    def append(self, chunk: bytes) -> bool:
        """Store what fits; returns True once the stream has gone past the limit."""
        self.total += len(chunk)
        room = self.limit - self._kept
        if room > 0:
            kept = chunk[:room]
            self._chunks.append(kept)
            self._kept += len(kept)
        return self.overflowed

    @property
    def overflowed(self) -> bool:
        return self.total > self.limit

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


def _feed(stream, data: bytes) -> None:
    """Write the whole input then close stdin; PlantUML waits for EOF."""
    try:
        stream.write(data)
    except BrokenPipeError:
        # engine quit without reading everything; its exit status reports why
        logger.debug("PlantUML closed stdin early")
    try:
        stream.close()
    except BrokenPipeError:
        pass


def _drain(stream, buffer: _BoundedBuffer,
           on_overflow: Optional[Callable[[], None]] = None) -> None:
    """Read a pipe to EOF; past the limit, bytes are read and dropped."""
    notified = False
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        if buffer.append(chunk) and not notified:
            notified = True
            if on_overflow is not None:
                on_overflow()
    stream.close()


class SubprocessEngine(EngineAdapter):
    """Runs PlantUML in pipe mode as a child process."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig.from_env()

    def build_command(self, format_flag: str) -> List[str]:
        """Command line for one pipe-mode render."""
        return [
            self.config.java_bin,
            "-jar", self.config.jar_path,
            format_flag,
            "-pipe",  # read stdin, write stdout
            "-charset", "UTF-8",
        ]

    def invoke(self, input_bytes: bytes, format_flag: str) -> EngineOutput:
        """
        Run the engine once.

        stdin is written and closed, stdout and stderr are drained, each on its
        own thread, while this thread waits on the wall-clock deadline. Each
        stream keeps at most ``max_output_bytes``. If stdout goes past that
        while the engine is still running, the engine is killed.

        Raises:
            EngineUnavailable: the process could not be started, or java
                could not open the jar
            RenderTimeout: the process exceeded ``timeout_seconds`` (killed)
            OutputTooLarge: stdout exceeded ``max_output_bytes`` (killed)
        """
        cmd = self.build_command(format_flag)
        limit = self.config.max_output_bytes
        logger.debug("Running %s (%d bytes input)", " ".join(cmd), len(input_bytes))

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Failed to launch PlantUML: %s", e)
            raise EngineUnavailable(f"{cmd[0]}: {e}") from e

        stdout = _BoundedBuffer(limit)
        stderr = _BoundedBuffer(limit)
        killed_for_size = threading.Event()

        def stop_engine():
            if proc.poll() is None:
                killed_for_size.set()
                proc.kill()

        threads = [
            threading.Thread(target=_feed, args=(proc.stdin, input_bytes), daemon=True),
            threading.Thread(target=_drain, args=(proc.stdout, stdout, stop_engine), daemon=True),
            threading.Thread(target=_drain, args=(proc.stderr, stderr), daemon=True),
        ]
        for thread in threads:
            thread.start()

        try:
            returncode = proc.wait(timeout=self.config.timeout_seconds)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            self._join(threads)
            logger.warning("PlantUML timed out after %ss, process killed", self.config.timeout_seconds)
            raise RenderTimeout(self.config.timeout_seconds)

        self._join(threads)

        if killed_for_size.is_set():
            logger.warning("PlantUML output passed %d bytes, process killed", limit)
            raise OutputTooLarge(stdout.total, limit)

        output = EngineOutput(
            returncode=returncode,
            stdout=stdout.getvalue(),
            stderr=stderr.getvalue(),
            truncated=stdout.overflowed,
            stdout_total=stdout.total,
        )

        if output.returncode != 0 and _MISSING_JAR_MARKER in output.stderr_text:
            raise EngineUnavailable(output.stderr_text.strip())

        return output

    @staticmethod
    def _join(threads: List[threading.Thread]) -> None:
        for thread in threads:
            thread.join(timeout=_JOIN_TIMEOUT_SECONDS)
