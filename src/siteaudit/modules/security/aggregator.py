"""Runs the security probes together and merges their results."""

import asyncio
import logging
from collections.abc import Sequence

from siteaudit.modules.target import Target

from .dns_records import probe_txt_records
from .models import COMMON_PORTS, SecurityPosture
from .ports import probe_ports
from .redirect import probe_https_redirect

logger = logging.getLogger(__name__)


class SecurityAggregator:
    """Fan out to the port, DNS and redirect probes and build a SecurityPosture.

    Each probe returns its own fallback value on failure, so assess() never
    raises for network errors.
    """

    def __init__(
        self,
        port_timeout: float = 1.0,
        http_timeout: float = 10.0,
        dns_timeout: float = 5.0,
        ports: Sequence[int] = COMMON_PORTS,
    ):
        self.port_timeout = port_timeout
        self.http_timeout = http_timeout
        self.dns_timeout = dns_timeout
        self.ports = tuple(ports)

    async def assess(self, target: Target) -> SecurityPosture:
        async with asyncio.TaskGroup() as group:
            redirect_task = group.create_task(
                probe_https_redirect(target, timeout=self.http_timeout)
            )
            ports_task = group.create_task(
                probe_ports(target.hostname, self.ports, timeout=self.port_timeout)
            )
            dns_task = group.create_task(
                probe_txt_records(target.hostname, timeout=self.dns_timeout)
            )

        posture = SecurityPosture(
            https_redirect_passed=redirect_task.result(),
            open_ports=ports_task.result(),
            dns_txt_records=dns_task.result(),
        )
        logger.info(
            "Security checks for %s: redirect=%s, %d TXT records",
            target.hostname,
            posture.https_redirect_passed,
            len(posture.dns_txt_records),
        )
        return posture
