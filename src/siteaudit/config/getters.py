"""Configuration getter functions."""

import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_local_config

PROVIDER_KEY_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}


def get_config(key: str, work_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. .env file in the working directory
    3. Global config file
    4. Default value
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    local_config = load_local_config(work_dir)
    if key in local_config and local_config[key] != "":
        return local_config[key]

    global_config = load_global_config()
    if key in global_config and global_config[key] not in (None, ""):
        return global_config[key]

    return default


def get_float(key: str, default: float, work_dir: Path | None = None) -> float:
    """Get a positive float setting, falling back to ``default`` on bad input."""
    raw = get_config(key, work_dir, default=default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def get_api_key(provider: str = "openai", work_dir: Path | None = None) -> str | None:
    """Get the summarization API key for a provider."""
    unified = get_config("SITEAUDIT_LLM_API_KEY", work_dir)
    if unified:
        return str(unified)

    env_var = PROVIDER_KEY_VARS.get(provider, f"{provider.upper()}_API_KEY")
    value = get_config(env_var, work_dir)
    return str(value) if value else None


def get_llm_provider(work_dir: Path | None = None) -> str:
    """Get LLM provider (default: openai)."""
    return str(get_config("SITEAUDIT_LLM_PROVIDER", work_dir, default="openai")).lower()


def get_llm_model(work_dir: Path | None = None) -> str | None:
    """Get LLM model name."""
    value = get_config("SITEAUDIT_LLM_MODEL", work_dir)
    return str(value) if value else None


def get_llm_base_url(work_dir: Path | None = None) -> str | None:
    """Get LLM base URL."""
    value = get_config("SITEAUDIT_LLM_BASE_URL", work_dir)
    return str(value) if value else None
