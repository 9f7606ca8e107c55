"""Launching engine processes and duplicating their output to log files."""

import asyncio
import logging
import os
import signal
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol, cast

log = logging.getLogger(__name__)


class TargetExecutionFailure(Exception):
    """Raised when the engine process for a target could not be started."""


class OutputSink(Protocol):
    """Byte sink receiving engine output as it is produced."""

    def write(self, data: bytes, /) -> int:
        """Write a chunk of output."""

    def flush(self) -> None:
        """Flush buffered output."""


class ProcessRunner(Protocol):
    """Capability to run a command to completion while streaming its output."""

    async def run(self, command: Sequence[str], output: OutputSink) -> int:
        """Run the command and return its exit code.

        Args:
            command: Program and arguments
            output: Receives the combined stdout and stderr of the process

        Returns:
            Process exit code, negative when killed by a signal

        Raises:
            TargetExecutionFailure: If the process could not be started

        """


@dataclass(frozen=True)
class TeeWriter:
    """Writes every chunk to all of its streams."""

    streams: Sequence[BinaryIO]

    def write(self, data: bytes, /) -> int:
        for stream in self.streams:
            stream.write(data)
        return len(data)

    def flush(self) -> None:
        for stream in self.streams:
            stream.flush()


@contextmanager
def open_log_tee(log_path: Path, terminal: BinaryIO) -> Generator[TeeWriter]:
    """Open a target log file, truncating it, and tee output to it and the terminal.

    The log file is closed on every exit path, including cancellation.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("wb") as log_file:
        yield TeeWriter((terminal, log_file))


@dataclass(frozen=True, kw_only=True)
class SubprocessRunner:
    """Runs commands as asyncio subprocesses with merged stdout and stderr."""

    cwd: Path | None = None
    chunk_size: int = 64 * 1024
    terminate_timeout: float = 10.0


    async def run(self, command: Sequence[str], output: OutputSink) -> int:
        """Run the command, streaming its output until it exits.

        The engine runs in its own process group so that signals reach the
        fuzzer processes it spawns as well.
        """
        log.debug("Launching: %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
        except OSError as exc:
            raise TargetExecutionFailure(
                f"Failed to launch {command[0]}: {exc}"
            ) from exc

        # Always set with stdout=PIPE
        stdout = cast(asyncio.StreamReader, process.stdout)

        with forward_interrupts(process):
            try:
                while chunk := await stdout.read(self.chunk_size):
                    output.write(chunk)
                    output.flush()
                return await process.wait()
            except BaseException:
                await self._stop(process)
                raise

    async def _stop(self, process: asyncio.subprocess.Process) -> None:
        """Terminate the engine process group, killing it if it does not exit."""
        log.warning("Stopping engine process group %d", process.pid)
        signal_process_group(process, signal.SIGTERM)
        try:
            await asyncio.wait_for(process.wait(), self.terminate_timeout)
        except TimeoutError:
            log.warning("Engine process %d did not stop, killing it", process.pid)
            signal_process_group(process, signal.SIGKILL)
            await process.wait()


def signal_process_group(process: asyncio.subprocess.Process, sig: int) -> None:
    """Send a signal to every process in the engine's process group."""
    try:
        os.killpg(process.pid, sig)
    except ProcessLookupError:
        log.debug("Engine process group %d already gone", process.pid)


@contextmanager
def forward_interrupts(process: asyncio.subprocess.Process) -> Generator[None]:
    """Route SIGINT to the running engine process group instead of the orchestrator.

    The engine then exits non-zero and only its own target is counted as
    failed, the campaign carries on with the next target.
    """
    loop = asyncio.get_running_loop()

    def _interrupt() -> None:
        log.warning("Interrupt received, stopping current target")
        signal_process_group(process, signal.SIGINT)

    previous = signal.getsignal(signal.SIGINT)
    try:
        loop.add_signal_handler(signal.SIGINT, _interrupt)
    except (NotImplementedError, RuntimeError):
        # No signal handlers on this platform or outside the main thread
        yield
        return

    try:
        yield
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        if previous is not None:
            signal.signal(signal.SIGINT, previous)
