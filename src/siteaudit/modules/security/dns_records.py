"""TXT record lookup."""

import logging

import dns.asyncresolver
import dns.exception

logger = logging.getLogger(__name__)


async def probe_txt_records(hostname: str, timeout: float = 5.0) -> tuple[tuple[str, ...], ...]:
    """Resolve TXT records for ``hostname``.

    A missing or misconfigured zone is an expected outcome, so every resolver
    failure yields an empty tuple instead of an error.
    """
    try:
        # The constructor reads resolv.conf and raises when it is unusable
        resolver = dns.asyncresolver.Resolver()
        resolver.timeout = timeout
        resolver.lifetime = max(timeout * 2, timeout + 1.0)
        answer = await resolver.resolve(hostname, "TXT")
    except dns.exception.DNSException as exc:
        logger.debug("TXT lookup for %s failed: %s", hostname, exc)
        return ()
    except Exception:
        logger.warning("Unexpected error resolving TXT records for %s", hostname, exc_info=True)
        return ()

    records: list[tuple[str, ...]] = []
    for rdata in answer:
        strings = getattr(rdata, "strings", None)
        if not isinstance(strings, (list, tuple)):
            continue
        record = tuple(
            part.decode("utf-8", errors="replace") if isinstance(part, bytes) else str(part)
            for part in strings
        )
        if record not in records:
            records.append(record)
    return tuple(records)
