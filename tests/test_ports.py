"""Tests for the concurrent port probe."""

import asyncio
import socket
import time

import pytest

from siteaudit.modules.security import COMMON_PORTS, PortState, PortStatus, check_port, probe_ports
from siteaudit.modules.security import ports as ports_module


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestCheckPort:
    """Test single-port classification."""

    @pytest.mark.asyncio
    async def test_listening_port_is_open(self):
        server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            status = await check_port("127.0.0.1", port, timeout=1.0)
        finally:
            server.close()
            await server.wait_closed()

        assert status == PortStatus(port=port, state=PortState.OPEN)
        assert status.describe() == f"Port {port} is open"

    @pytest.mark.asyncio
    async def test_refused_port_is_closed_or_filtered(self):
        port = _unused_port()
        status = await check_port("127.0.0.1", port, timeout=1.0)
        assert status.state is PortState.CLOSED_OR_FILTERED
        assert status.describe() == f"Port {port} is closed or filtered"

    @pytest.mark.asyncio
    async def test_timeout_is_closed_or_filtered(self, monkeypatch):
        async def hang(*args, **kwargs):
            await asyncio.sleep(10)

        monkeypatch.setattr(ports_module.asyncio, "open_connection", hang)
        status = await check_port("example.com", 80, timeout=0.05)
        assert status.state is PortState.CLOSED_OR_FILTERED


class TestProbePorts:
    """Test fan-out over the fixed port list."""

    @pytest.mark.asyncio
    async def test_returns_one_entry_per_port_in_declared_order(self, monkeypatch):
        # Later ports finish first
        async def fake_check(hostname, port, timeout=1.0):
            await asyncio.sleep(0.001 * (len(COMMON_PORTS) - COMMON_PORTS.index(port)))
            state = PortState.OPEN if port in (443, 22) else PortState.CLOSED_OR_FILTERED
            return PortStatus(port=port, state=state)

        monkeypatch.setattr(ports_module, "check_port", fake_check)
        results = await probe_ports("example.com")

        assert len(results) == 7
        assert [status.port for status in results] == [80, 443, 21, 22, 25, 3306, 3389]
        assert [status.port for status in results if status.is_open] == [443, 22]

    @pytest.mark.asyncio
    async def test_ports_run_concurrently(self, monkeypatch):
        async def hang(*args, **kwargs):
            await asyncio.sleep(10)

        monkeypatch.setattr(ports_module.asyncio, "open_connection", hang)
        started = time.perf_counter()
        results = await probe_ports("example.com", timeout=0.2)
        elapsed = time.perf_counter() - started

        assert len(results) == len(COMMON_PORTS)
        assert all(status.state is PortState.CLOSED_OR_FILTERED for status in results)
        assert elapsed < 0.2 * len(COMMON_PORTS)

    @pytest.mark.asyncio
    async def test_unresolvable_host_reports_all_closed(self):
        results = await probe_ports("nonexistent.invalid", timeout=0.5)
        assert [status.port for status in results] == list(COMMON_PORTS)
        assert not any(status.is_open for status in results)
