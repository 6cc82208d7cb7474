"""External command execution for the publish step."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)


class CommandExecutionError(Exception):
    """Raised when a command fails to start, exits non-zero, or times out."""

    def __init__(self, message: str, output: bytes = b"", returncode: int | None = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode


class CommandExecutor(Protocol):
    """
    Runs an external command and returns its combined stdout/stderr.

    Implementations raise CommandExecutionError on failure, with whatever
    output was captured attached to the error.
    """

    async def run(
        self,
        name: str,
        args: Sequence[str],
        env: Mapping[str, str],
        work_dir: str,
    ) -> bytes:
        ...


class SubprocessExecutor:
    """Runs commands as child processes of the plugin."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    async def run(
        self,
        name: str,
        args: Sequence[str],
        env: Mapping[str, str],
        work_dir: str,
    ) -> bytes:
        """
        Execute `name args...` and capture stdout and stderr as one stream.

        Args:
            name: Executable to run (looked up on PATH)
            args: Command arguments, passed as a vector (no shell)
            env: Variables overlaid on top of the inherited environment
            work_dir: Working directory; empty means the current directory

        Returns:
            Combined output of the process

        Raises:
            CommandExecutionError if the process cannot start, exits non-zero or times out
        """
        child_env = {**os.environ, **env} if env else None

        try:
            proc = await asyncio.create_subprocess_exec(
                name,
                *args,
                cwd=work_dir or None,
                env=child_env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            raise CommandExecutionError(f"failed to start {name}: {e}") from e

        # Chunks survive a timeout so the error can carry what mix printed so far
        chunks: list[bytes] = []

        try:
            await asyncio.wait_for(_collect_output(proc, chunks), timeout=self.timeout)
        except asyncio.TimeoutError:
            await _kill(proc)
            raise CommandExecutionError(
                f"{name} timed out after {self.timeout} seconds",
                output=b"".join(chunks),
                returncode=proc.returncode,
            )
        except asyncio.CancelledError:
            logger.warning("Publish cancelled, terminating %s (pid %s)", name, proc.pid)
            await _kill(proc)
            raise

        output = b"".join(chunks)
        if proc.returncode != 0:
            raise CommandExecutionError(
                f"exit status {proc.returncode}",
                output=output,
                returncode=proc.returncode,
            )

        return output


async def _collect_output(proc: asyncio.subprocess.Process, chunks: list[bytes]) -> None:
    while True:
        chunk = await proc.stdout.read(4096)
        if not chunk:
            break
        chunks.append(chunk)
    await proc.wait()


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        proc.kill()
    await proc.wait()


@dataclass(frozen=True)
class ExecutorCall:
    """A single recorded call to RecordingExecutor."""
    name: str
    args: list[str]
    env: dict[str, str]
    work_dir: str


@dataclass
class RecordingExecutor:
    """
    Test double that records calls instead of running anything.

    Returns `output` from every call, or raises `error` when one is set.
    """
    output: bytes = b"mock output"
    error: CommandExecutionError | None = None
    calls: list[ExecutorCall] = field(default_factory=list)

    async def run(
        self,
        name: str,
        args: Sequence[str],
        env: Mapping[str, str],
        work_dir: str,
    ) -> bytes:
        self.calls.append(ExecutorCall(name=name, args=list(args), env=dict(env), work_dir=work_dir))
        if self.error is not None:
            raise self.error
        return self.output
