"""Network security posture probes."""

from .aggregator import SecurityAggregator
from .dns_records import probe_txt_records
from .models import COMMON_PORTS, PortState, PortStatus, SecurityPosture
from .ports import check_port, probe_ports
from .redirect import probe_https_redirect

__all__ = [
    "COMMON_PORTS",
    "PortState",
    "PortStatus",
    "SecurityAggregator",
    "SecurityPosture",
    "check_port",
    "probe_https_redirect",
    "probe_ports",
    "probe_txt_records",
]
