"""Async HTTP helper for the redirect probe and the browser readiness poll."""

import time
from dataclasses import dataclass

import httpx

USER_AGENT = "siteaudit/0.1 (+https://pypi.org/project/siteaudit/)"


@dataclass(frozen=True)
class HTTPResponse:
    """The parts of a response the probes look at. Bodies are never kept."""

    url: str
    status_code: int
    location: str | None
    elapsed: float

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400 and self.location is not None

    @classmethod
    def from_httpx(cls, response: httpx.Response, elapsed: float) -> "HTTPResponse":
        return cls(
            url=str(response.url),
            status_code=response.status_code,
            location=response.headers.get("location"),
            elapsed=elapsed,
        )


class HTTPClient:
    """Thin async wrapper around ``httpx.AsyncClient``.

    Redirects are not followed by default: the redirect probe needs the first
    response exactly as the server sent it.
    """

    def __init__(self, timeout: float = 10.0, follow_redirects: bool = False):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            headers={"User-Agent": USER_AGENT},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def get(self, url: str) -> HTTPResponse:
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")
        started = time.perf_counter()
        response = await self.client.get(url)
        return HTTPResponse.from_httpx(response, time.perf_counter() - started)
