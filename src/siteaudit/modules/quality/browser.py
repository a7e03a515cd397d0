"""Headless Chrome lifecycle for the rendering engine."""

import asyncio
import logging
import shutil
import socket
import tempfile
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Protocol

import httpx

from siteaudit.errors import ProbeFailure
from siteaudit.tools.http import HTTPClient

from .runtime import resolve_binary, terminate_process

logger = logging.getLogger(__name__)

CHROME_CANDIDATES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
)


class BrowserHandle:
    """A launched browser: the DevTools port and a one-shot ``kill()``."""

    def __init__(self, port: int, on_kill: Callable[[], Awaitable[None]]):
        self.port = port
        self._on_kill = on_kill
        self.killed = False

    async def kill(self) -> None:
        if self.killed:
            return
        self.killed = True
        await self._on_kill()


class BrowserLauncher(Protocol):
    async def launch(self, headless: bool = True) -> BrowserHandle: ...


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class ChromeLauncher:
    """Start Chrome with a remote debugging port, like chrome-launcher does."""

    def __init__(self, chrome_path: str | None = None, startup_timeout: float = 15.0):
        self.chrome_path = chrome_path
        self.startup_timeout = startup_timeout

    def _binary(self) -> str:
        if self.chrome_path:
            return self.chrome_path
        for name in CHROME_CANDIDATES:
            found = resolve_binary(name)
            if found:
                return found
        raise ProbeFailure("Chrome/Chromium not found; set CHROME_PATH")

    async def launch(self, headless: bool = True) -> BrowserHandle:
        binary = self._binary()
        port = _free_port()
        profile_dir = tempfile.mkdtemp(prefix="siteaudit-chrome-")
        command = [
            binary,
            f"--remote-debugging-port={port}",
            f"--user-data-dir={profile_dir}",
            "--no-first-run",
            "--no-default-browser-check",
            "--disable-gpu",
        ]
        if headless:
            command.append("--headless=new")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            shutil.rmtree(profile_dir, ignore_errors=True)
            raise ProbeFailure(f"Could not start Chrome: {exc}") from exc

        async def _shutdown() -> None:
            await terminate_process(process)
            shutil.rmtree(profile_dir, ignore_errors=True)
            logger.debug("Chrome on port %s stopped", port)

        handle = BrowserHandle(port, _shutdown)
        try:
            await self._wait_for_devtools(port, process)
        except BaseException:
            await handle.kill()
            raise
        logger.info("Chrome started on debugging port %s", port)
        return handle

    async def _wait_for_devtools(self, port: int, process: asyncio.subprocess.Process) -> None:
        deadline = time.monotonic() + self.startup_timeout
        url = f"http://127.0.0.1:{port}/json/version"
        async with HTTPClient(timeout=1.0) as client:
            while time.monotonic() < deadline:
                if process.returncode is not None:
                    raise ProbeFailure(f"Chrome exited early with code {process.returncode}")
                try:
                    response = await client.get(url)
                    if response.status_code == 200:
                        return
                except httpx.HTTPError:
                    pass
                await asyncio.sleep(0.2)
        raise ProbeFailure(f"Chrome did not open its debugging port within {self.startup_timeout}s")


@asynccontextmanager
async def browser_session(
    launcher: BrowserLauncher, headless: bool = True
) -> AsyncIterator[BrowserHandle]:
    """Launch a browser and guarantee ``kill()`` runs exactly once on exit."""
    handle = await launcher.launch(headless=headless)
    try:
        yield handle
    finally:
        await handle.kill()
