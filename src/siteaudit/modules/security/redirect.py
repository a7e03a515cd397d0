"""Plain HTTP to HTTPS redirect check."""

import logging

import httpx

from siteaudit.modules.target import Target
from siteaudit.tools.http import HTTPClient

logger = logging.getLogger(__name__)


async def probe_https_redirect(target: Target, timeout: float = 10.0) -> bool:
    """Return True when ``http://<host>`` redirects straight to the normalized URL.

    A missing redirect and a failed request both yield False.
    """
    host = f"[{target.hostname}]" if ":" in target.hostname else target.hostname
    http_url = f"http://{host}"
    try:
        async with HTTPClient(timeout=timeout, follow_redirects=False) as client:
            response = await client.get(http_url)
    except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
        logger.info("HTTPS redirect check for %s failed: %s", http_url, exc)
        return False

    passed = response.location == target.normalized_url
    logger.debug(
        "HTTPS redirect check for %s: status=%s location=%r passed=%s",
        http_url,
        response.status_code,
        response.location,
        passed,
    )
    return passed
