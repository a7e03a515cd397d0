"""Async chat client used to summarize reports."""

from __future__ import annotations

import httpx

from siteaudit.config import LLMSettings

from .providers import chat_anthropic, chat_openai

PROVIDERS = {
    "openai": chat_openai,
    "openrouter": chat_openai,
    "anthropic": chat_anthropic,
}


class LLMClient:
    """Chat-completion client for OpenAI, OpenRouter and Anthropic.

    Use as an async context manager so the connection pool is closed after
    the single summary request.
    """

    def __init__(self, settings: LLMSettings, http_client: httpx.AsyncClient | None = None):
        if not settings.api_key:
            raise ValueError(f"API key not configured for provider: {settings.provider}")
        self.provider = settings.provider.lower()
        self.api_key = settings.api_key
        self.model = settings.model
        self.base_url = settings.base_url
        self._owns_http = http_client is None
        self._http: httpx.AsyncClient | None = http_client or httpx.AsyncClient(
            timeout=settings.timeout
        )

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("LLM client is closed")
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
        self._http = None

    async def __aenter__(self) -> LLMClient:
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.aclose()

    async def chat(self, message: str, system_prompt: str | None = None) -> str:
        """Send one user message and return the reply text."""
        handler = PROVIDERS.get(self.provider)
        if handler is None:
            raise ValueError(f"Unknown provider: {self.provider}")
        return await handler(self, message, system_prompt)
