"""Concurrent TCP reachability checks for well-known ports."""

import asyncio
import logging
from collections.abc import Sequence

from .models import COMMON_PORTS, PortState, PortStatus

logger = logging.getLogger(__name__)


async def check_port(hostname: str, port: int, timeout: float = 1.0) -> PortStatus:
    """Try one TCP connect. Timeouts and socket errors both mean closed or filtered."""
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(hostname, port), timeout)
    except (TimeoutError, OSError) as exc:
        logger.debug("Port %s on %s not reachable: %s", port, hostname, exc or type(exc).__name__)
        return PortStatus(port=port, state=PortState.CLOSED_OR_FILTERED)

    writer.close()
    try:
        await asyncio.wait_for(writer.wait_closed(), timeout)
    except (TimeoutError, OSError):
        pass
    return PortStatus(port=port, state=PortState.OPEN)


async def probe_ports(
    hostname: str,
    ports: Sequence[int] = COMMON_PORTS,
    timeout: float = 1.0,
) -> tuple[PortStatus, ...]:
    """Check every port concurrently; the result follows the order of ``ports``."""
    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(check_port(hostname, port, timeout)) for port in ports]
    results = tuple(task.result() for task in tasks)
    open_count = sum(1 for status in results if status.is_open)
    logger.info("Port probe for %s: %d/%d open", hostname, open_count, len(results))
    return results
