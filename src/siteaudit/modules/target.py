"""Target URL validation and canonicalization."""

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from siteaudit.errors import InvalidUrlError

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_FORBIDDEN_HOST_CHARS = re.compile(r"[\s<>^|\\\"%#?@/\[\]]")
_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Target:
    """The site under audit. Created once per run."""

    raw_input: str
    normalized_url: str
    hostname: str


def normalize_url(raw_input: str) -> Target:
    """Validate ``raw_input`` and turn it into an absolute http(s) URL.

    Whitespace is trimmed and ``https://`` is prepended only when no http or
    https scheme is present. An existing scheme is kept (lower-cased), the host
    is lower-cased and an empty path becomes ``/``.
    """
    candidate = (raw_input or "").strip()
    if not _SCHEME_RE.match(candidate):
        candidate = f"https://{candidate}"
    logger.debug("Normalizing %r as %r", raw_input, candidate)

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(raw_input, str(exc)) from exc

    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if not host:
        raise InvalidUrlError(raw_input, "missing host")
    host = _canonical_host(raw_input, host)

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo = parts.netloc.rpartition("@")[0] if "@" in parts.netloc else ""
    if userinfo:
        netloc = f"{userinfo}@{netloc}"

    path = parts.path or "/"
    normalized = urlunsplit((scheme, netloc, path, parts.query, parts.fragment))
    logger.debug("Formatted URL: %s", normalized)
    return Target(raw_input=raw_input, normalized_url=normalized, hostname=host)


def _canonical_host(raw_input: str, host: str) -> str:
    if ":" in host:
        # IPv6 literal, already validated by urlsplit
        return host
    if _FORBIDDEN_HOST_CHARS.search(host) or host.startswith(".") or ".." in host:
        raise InvalidUrlError(raw_input, f"invalid host {host!r}")
    try:
        return host.encode("idna").decode("ascii").lower()
    except UnicodeError as exc:
        raise InvalidUrlError(raw_input, f"invalid host {host!r}") from exc
