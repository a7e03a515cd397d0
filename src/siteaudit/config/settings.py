"""Resolved settings threaded explicitly into audit components."""

from dataclasses import dataclass, field
from pathlib import Path

from .getters import (
    get_api_key,
    get_config,
    get_float,
    get_llm_base_url,
    get_llm_model,
    get_llm_provider,
)

DEFAULT_MODELS = {
    "openai": "gpt-4",
    "anthropic": "claude-3-5-sonnet-20241022",
    "openrouter": "openai/gpt-4o-mini",
}


@dataclass(frozen=True)
class LLMSettings:
    """Credentials and endpoint for the summarization collaborator."""

    provider: str = "openai"
    api_key: str | None = None
    model: str = "gpt-4"
    base_url: str | None = None
    timeout: float = 60.0

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class AuditSettings:
    """All tunables for one audit run."""

    reports_dir: Path = Path("Reports")
    port_timeout: float = 1.0
    http_timeout: float = 10.0
    engine_timeout: float = 120.0
    lighthouse_bin: str | None = None
    pa11y_bin: str | None = None
    chrome_path: str | None = None
    llm: LLMSettings = field(default_factory=LLMSettings)

    @classmethod
    def load(cls, work_dir: Path | None = None) -> "AuditSettings":
        """Resolve every setting once from env, .env and the global config."""
        provider = get_llm_provider(work_dir)
        llm = LLMSettings(
            provider=provider,
            api_key=get_api_key(provider, work_dir),
            model=get_llm_model(work_dir) or DEFAULT_MODELS.get(provider, "gpt-4"),
            base_url=get_llm_base_url(work_dir),
            timeout=get_float("SITEAUDIT_LLM_TIMEOUT", 60.0, work_dir),
        )
        return cls(
            reports_dir=Path(get_config("SITEAUDIT_REPORTS_DIR", work_dir, default="Reports")),
            port_timeout=get_float("SITEAUDIT_PORT_TIMEOUT", 1.0, work_dir),
            http_timeout=get_float("SITEAUDIT_HTTP_TIMEOUT", 10.0, work_dir),
            engine_timeout=get_float("SITEAUDIT_ENGINE_TIMEOUT", 120.0, work_dir),
            lighthouse_bin=get_config("SITEAUDIT_LIGHTHOUSE_BIN", work_dir),
            pa11y_bin=get_config("SITEAUDIT_PA11Y_BIN", work_dir),
            chrome_path=get_config("CHROME_PATH", work_dir),
            llm=llm,
        )
