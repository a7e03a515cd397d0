"""Data models for the network security probes."""

from dataclasses import dataclass
from enum import Enum

COMMON_PORTS: tuple[int, ...] = (80, 443, 21, 22, 25, 3306, 3389)


class PortState(Enum):
    """Outcome of one TCP connect attempt."""

    OPEN = "open"
    CLOSED_OR_FILTERED = "closed or filtered"


@dataclass(frozen=True)
class PortStatus:
    """Reachability of one well-known port."""

    port: int
    state: PortState

    @property
    def is_open(self) -> bool:
        return self.state is PortState.OPEN

    def describe(self) -> str:
        return f"Port {self.port} is {self.state.value}"


@dataclass(frozen=True)
class SecurityPosture:
    """Merged result of the port, DNS and redirect probes."""

    https_redirect_passed: bool
    open_ports: tuple[PortStatus, ...]
    dns_txt_records: tuple[tuple[str, ...], ...] = ()
