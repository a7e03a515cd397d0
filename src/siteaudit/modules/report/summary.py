"""Best-effort natural-language summary of a rendered report."""

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from siteaudit.ai.llm import LLMClient
from siteaudit.config import LLMSettings
from siteaudit.modules.results import Failed, Ok, ProbeResult

from .markdown_report import render_markdown
from .models import Report

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = "Summarize the following website audit report:\n\n"


class SummaryRequestor:
    """Ask the summarization service for a summary; never fail the run."""

    def __init__(
        self,
        settings: LLMSettings,
        client_factory: Callable[[LLMSettings], Any] | None = None,
    ):
        self.settings = settings
        self._client_factory = client_factory or LLMClient

    async def request(self, artifact: str) -> ProbeResult[str]:
        if not self.settings.configured:
            logger.warning(
                "No API key configured for %s; skipping report summary", self.settings.provider
            )
            return Failed("summarization credential not configured")

        try:
            async with self._client_factory(self.settings) as client:
                text = await client.chat(f"{SUMMARY_PROMPT}{artifact}")
        except Exception as exc:
            logger.warning("Summary request failed: %s", exc)
            return Failed(f"summary request failed: {exc}")

        if not isinstance(text, str) or not text.strip():
            logger.warning("Summary service returned an empty response")
            return Failed("empty summary")
        return Ok(text.strip())

    async def append(
        self,
        report: Report,
        artifact: str,
        renderer: Callable[[Report], str] = render_markdown,
    ) -> tuple[Report, str]:
        """Summarize ``artifact`` and re-render the report with the summary section.

        On failure the report and artifact come back unchanged.
        """
        result = await self.request(artifact)
        if not isinstance(result, Ok):
            return report, artifact
        report = replace(report, generated_summary=result.value)
        return report, renderer(report)
