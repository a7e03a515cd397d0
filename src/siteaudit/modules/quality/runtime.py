"""Subprocess helpers for the external audit tools (lighthouse, pa11y, Chrome)."""

import asyncio
import logging
import shlex
import shutil
import time
from collections.abc import Iterable
from dataclasses import dataclass

from siteaudit.errors import ProbeFailure

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured subprocess result."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    def first_error_line(self) -> str:
        lines = (self.stderr or self.stdout).strip().splitlines()
        return lines[0] if lines else "unknown error"


def resolve_binary(name: str, override: str | None = None) -> str | None:
    """Return the configured path, or the absolute path of ``name`` on PATH."""
    return override or shutil.which(name)


async def run_command(
    command: list[str],
    timeout: float | None = None,
    allowed_exit_codes: Iterable[int] = (0,),
) -> CommandResult:
    """Run ``command`` and capture its decoded output.

    Start failures, timeouts and exit codes outside ``allowed_exit_codes``
    raise ProbeFailure. A timed-out process is terminated before raising.
    """
    logger.debug("Running: %s", shlex.join(command))
    started = time.perf_counter()
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ProbeFailure(f"Could not start {command[0]}: {exc}") from exc

    try:
        async with asyncio.timeout(timeout):
            stdout, stderr = await process.communicate()
    except TimeoutError:
        await terminate_process(process)
        raise ProbeFailure(f"Command timed out after {timeout:g}s: {command[0]}") from None

    result = CommandResult(
        command=list(command),
        returncode=process.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
    logger.debug(
        "%s exited with %s after %.2fs",
        command[0],
        result.returncode,
        time.perf_counter() - started,
    )
    if result.returncode not in tuple(allowed_exit_codes):
        raise ProbeFailure(
            f"Command failed with exit code {result.returncode}: {result.first_error_line()}"
        )
    return result


async def terminate_process(process: asyncio.subprocess.Process, grace: float = 3.0) -> None:
    """SIGTERM, then SIGKILL if the process is still alive after ``grace`` seconds."""
    if process.returncode is not None:
        return
    try:
        process.terminate()
        await asyncio.wait_for(process.wait(), timeout=grace)
    except ProcessLookupError:
        return
    except TimeoutError:
        process.kill()
        await process.wait()
