"""Lighthouse rendering/scoring engine adapter."""

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from siteaudit.errors import ProbeFailure

from .models import AuditEntry, CoreWebVitals, DeviceProfile, PerformanceMetrics, QualityResult
from .runtime import resolve_binary, run_command

logger = logging.getLogger(__name__)

CATEGORY_KEYS = {
    "seo": "seo_score",
    "accessibility": "accessibility_score",
    "performance": "performance_score",
    "best-practices": "best_practices_score",
}


class RenderingEngine(Protocol):
    async def run(self, url: str, profile: DeviceProfile, port: int) -> dict[str, Any]: ...


class LighthouseEngine:
    """Run the lighthouse CLI against an already running Chrome."""

    name = "lighthouse"

    def __init__(
        self,
        binary: str | None = None,
        timeout: float = 120.0,
        command_runner: Callable[..., Any] | None = None,
    ):
        self.binary = binary
        self.timeout = timeout
        self._runner = command_runner or run_command

    def build_command(self, binary: str, url: str, profile: DeviceProfile, port: int) -> list[str]:
        command = [
            binary,
            url,
            "--output=json",
            "--output-path=stdout",
            "--quiet",
            f"--port={port}",
            "--only-categories=performance,accessibility,best-practices,seo",
            f"--form-factor={profile.form_factor}",
        ]
        if profile.screen_emulation_disabled:
            command.append("--screenEmulation.disabled")
        return command

    async def run(self, url: str, profile: DeviceProfile, port: int) -> dict[str, Any]:
        binary = resolve_binary("lighthouse", self.binary)
        if not binary:
            raise ProbeFailure("lighthouse binary not found in PATH")

        result = await self._runner(
            self.build_command(binary, url, profile, port),
            timeout=self.timeout,
        )
        try:
            lhr = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise ProbeFailure(f"lighthouse returned invalid JSON: {exc}") from exc
        if not isinstance(lhr, dict):
            raise ProbeFailure("lighthouse result is not an object")

        runtime_error = lhr.get("runtimeError")
        if isinstance(runtime_error, dict) and runtime_error.get("code"):
            raise ProbeFailure(
                f"lighthouse runtime error {runtime_error.get('code')}: "
                f"{runtime_error.get('message', '')}".strip()
            )
        return lhr


def _display_value(audits: dict[str, Any], audit_id: str) -> str:
    audit = audits.get(audit_id)
    if isinstance(audit, dict):
        value = audit.get("displayValue")
        if value not in (None, ""):
            return str(value)
    return "n/a"


def _category_score(categories: dict[str, Any], key: str) -> float:
    category = categories.get(key)
    raw = category.get("score") if isinstance(category, dict) else None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ProbeFailure(f"lighthouse result has no score for category {key!r}")
    if not 0 <= raw <= 1:
        raise ProbeFailure(f"lighthouse score for {key!r} out of range: {raw}")
    return round(raw * 100, 2)


def _audit_entry(audit: dict[str, Any]) -> AuditEntry:
    score = audit.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        score = None
    display = audit.get("displayValue")
    return AuditEntry(
        title=str(audit.get("title") or "").strip(),
        description=str(audit.get("description") or "").strip(),
        score=float(score) if score is not None else None,
        display_value=str(display) if display not in (None, "") else "",
    )


def normalize_lighthouse_result(lhr: dict[str, Any]) -> QualityResult:
    """Convert a raw Lighthouse result into a QualityResult.

    A missing category score fails the whole device run rather than being
    reported as zero.
    """
    categories = lhr.get("categories")
    if not isinstance(categories, dict):
        raise ProbeFailure("lighthouse result has no categories")
    audits = lhr.get("audits")
    if not isinstance(audits, dict):
        audits = {}

    scores = {field: _category_score(categories, key) for key, field in CATEGORY_KEYS.items()}

    return QualityResult(
        **scores,
        core_web_vitals=CoreWebVitals(
            lcp=_display_value(audits, "largest-contentful-paint"),
            fid=_display_value(audits, "max-potential-fid"),
            cls=_display_value(audits, "cumulative-layout-shift"),
        ),
        metrics=PerformanceMetrics(
            fcp=_display_value(audits, "first-contentful-paint"),
            lcp=_display_value(audits, "largest-contentful-paint"),
            tti=_display_value(audits, "interactive"),
            cls=_display_value(audits, "cumulative-layout-shift"),
        ),
        audits={
            audit_id: _audit_entry(audit)
            for audit_id, audit in audits.items()
            if isinstance(audit, dict)
        },
    )
