"""Run firebase-tools and capture what it prints."""

import asyncio
import contextlib
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, TextIO, cast

from hosting_deploy.core.exceptions import ProcessFailure
from hosting_deploy.utils.logging import get_logger

logger = get_logger(__name__)

# Deploy results arrive as a single JSON line that can exceed asyncio's 64 KiB default
STREAM_LIMIT = 4 * 1024 * 1024


@dataclass
class CapturedOutput:
    """Standard output of one process run, line by line in arrival order."""

    chunks: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    @property
    def last_line(self) -> str:
        """The last non-blank line, stripped; empty if nothing was printed."""
        for chunk in reversed(self.chunks):
            if chunk.strip():
                return chunk.strip()
        return ""


class Invoker(Protocol):
    """Anything that can run a command and hand back its stdout."""

    async def invoke(
        self,
        command: Sequence[str],
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> CapturedOutput: ...


class ProcessInvoker:
    """Spawns the deploy tool as a child process.

    The child's environment is the current process environment with ``env``
    laid over it. stderr is inherited so the tool's progress output lands in
    the job log untouched; stdout is captured and, when ``echo`` is set,
    mirrored to ``stream`` as it arrives.
    """

    def __init__(self, echo: bool = True, stream: TextIO | None = None):
        self.echo = echo
        self.stream = stream

    async def invoke(
        self,
        command: Sequence[str],
        args: Sequence[str],
        env: Mapping[str, str],
    ) -> CapturedOutput:
        output = CapturedOutput()
        argv = [*command, *args]

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                limit=STREAM_LIMIT,
                env={**os.environ, **env},
            )
        except OSError as e:
            message = f"Unable to start {command[0]}: {e}"
            self._log_failure(output, message)
            raise ProcessFailure(message, output) from e

        stdout = cast(asyncio.StreamReader, process.stdout)
        try:
            try:
                async for raw_line in stdout:
                    line = raw_line.decode("utf-8", errors="replace")
                    output.chunks.append(line)
                    if self.echo:
                        stream = self.stream or sys.stdout
                        stream.write(line)
                        stream.flush()

                returncode = await process.wait()
            except (ValueError, asyncio.LimitOverrunError) as e:
                # A line longer than STREAM_LIMIT
                message = f"Unable to read output of {command[0]}: {e}"
                self._log_failure(output, message)
                raise ProcessFailure(message, output) from e
        finally:
            # Never leave the child running behind a failed or cancelled read
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        if returncode != 0:
            message = f"The process '{command[0]}' failed with exit code {returncode}"
            self._log_failure(output, message)
            raise ProcessFailure(message, output, returncode)

        return output

    def _log_failure(self, output: CapturedOutput, message: str) -> None:
        logger.error(
            "process.failed",
            error=message,
            captured_output=output.text,
        )
