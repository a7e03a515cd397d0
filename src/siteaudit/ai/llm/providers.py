"""Request builders and response parsers for the supported chat APIs."""

import json
from typing import Any

import httpx

DEFAULT_BASE_URLS = {
    "openai": "https://api.openai.com/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "anthropic": "https://api.anthropic.com",
}
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1024


def _decode(response: httpx.Response, provider: str) -> Any:
    response.raise_for_status()
    try:
        return response.json()
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"{provider} API returned invalid JSON (status {response.status_code}): "
            f"{response.text[:300]!r}"
        ) from exc


async def chat_openai(client, message: str, system_prompt: str | None = None) -> str:
    """OpenAI-compatible ``/chat/completions`` (OpenAI and OpenRouter)."""
    base = client.base_url or DEFAULT_BASE_URLS[client.provider]
    messages = [{"role": "user", "content": message}]
    if system_prompt:
        messages.insert(0, {"role": "system", "content": system_prompt})

    response = await client.http.post(
        f"{base.rstrip('/')}/chat/completions",
        headers={"Authorization": f"Bearer {client.api_key}"},
        json={"model": client.model, "messages": messages},
    )
    data = _decode(response, client.provider)

    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        raise ValueError(f"{client.provider} API response has no 'choices'")
    first = choices[0] if isinstance(choices[0], dict) else {}
    message_obj = first.get("message")
    content = message_obj.get("content") if isinstance(message_obj, dict) else None
    if not isinstance(content, str):
        raise ValueError(f"{client.provider} API response choices[0] has no message content")
    return content


async def chat_anthropic(client, message: str, system_prompt: str | None = None) -> str:
    """Anthropic ``/v1/messages``; text blocks of the reply are joined."""
    base = client.base_url or DEFAULT_BASE_URLS["anthropic"]
    payload: dict[str, Any] = {
        "model": client.model,
        "max_tokens": MAX_TOKENS,
        "messages": [{"role": "user", "content": message}],
    }
    if system_prompt:
        payload["system"] = system_prompt

    response = await client.http.post(
        f"{base.rstrip('/')}/v1/messages",
        headers={"x-api-key": client.api_key, "anthropic-version": ANTHROPIC_VERSION},
        json=payload,
    )
    data = _decode(response, "anthropic")

    blocks = data.get("content") if isinstance(data, dict) else None
    if not isinstance(blocks, list):
        raise ValueError("anthropic API response has no 'content' list")
    texts = [
        block["text"]
        for block in blocks
        if isinstance(block, dict) and isinstance(block.get("text"), str)
    ]
    if not texts:
        raise ValueError("anthropic API response has no text content")
    return "".join(texts)
