"""
Configuration management for siteaudit.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. .env file in the working directory
3. Global config file (~/.siteaudit/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    global_config_path,
    load_env_file,
    load_global_config,
    load_local_config,
)
from .getters import (
    get_api_key,
    get_config,
    get_float,
    get_llm_base_url,
    get_llm_model,
    get_llm_provider,
)
from .settings import DEFAULT_MODELS, AuditSettings, LLMSettings

__all__ = [
    # env_loader
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_local_config",
    # getters
    "get_api_key",
    "get_config",
    "get_float",
    "get_llm_base_url",
    "get_llm_model",
    "get_llm_provider",
    # settings
    "DEFAULT_MODELS",
    "AuditSettings",
    "LLMSettings",
]
