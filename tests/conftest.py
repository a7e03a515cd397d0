"""Test configuration and fixtures for siteaudit."""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from siteaudit.modules.quality import (
    AuditEntry,
    CoreWebVitals,
    PerformanceMetrics,
    QualityResult,
)
from siteaudit.modules.security import COMMON_PORTS, PortState, PortStatus, SecurityPosture
from siteaudit.modules.target import Target, normalize_url

HOST_SETTING_VARS = {"OPENAI_API_KEY", "ANTHROPIC_API_KEY", "OPENROUTER_API_KEY", "CHROME_PATH"}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Keep real credentials, .env files and ~/.siteaudit out of tests."""
    for key in list(os.environ):
        if key.startswith("SITEAUDIT_") or key in HOST_SETTING_VARS:
            monkeypatch.delenv(key, raising=False)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    work = temp_dir / "work"
    work.mkdir()
    monkeypatch.chdir(work)


@pytest.fixture
def target() -> Target:
    return normalize_url("example.com")


@pytest.fixture
def make_quality() -> Callable[..., QualityResult]:
    """Factory for QualityResult values with passing scores by default."""

    def _make(
        performance: float = 95,
        accessibility: float = 95,
        seo: float = 95,
        best_practices: float = 95,
        audits: dict[str, AuditEntry] | None = None,
    ) -> QualityResult:
        return QualityResult(
            seo_score=seo,
            accessibility_score=accessibility,
            performance_score=performance,
            best_practices_score=best_practices,
            core_web_vitals=CoreWebVitals(lcp="2.1 s", fid="120 ms", cls="0.01"),
            metrics=PerformanceMetrics(fcp="1.0 s", lcp="2.1 s", tti="3.2 s", cls="0.01"),
            audits=audits or {},
        )

    return _make


@pytest.fixture
def make_posture() -> Callable[..., SecurityPosture]:
    def _make(
        redirect: bool = True,
        open_ports: tuple[int, ...] = (80, 443),
        txt: tuple[tuple[str, ...], ...] = (),
    ) -> SecurityPosture:
        return SecurityPosture(
            https_redirect_passed=redirect,
            open_ports=tuple(
                PortStatus(
                    port=port,
                    state=PortState.OPEN if port in open_ports else PortState.CLOSED_OR_FILTERED,
                )
                for port in COMMON_PORTS
            ),
            dns_txt_records=txt,
        )

    return _make


def _audit(title: str, score: Any, display: str | None = None) -> dict[str, Any]:
    audit: dict[str, Any] = {
        "title": title,
        "description": f"{title} description.",
        "score": score,
    }
    if display is not None:
        audit["displayValue"] = display
    return audit


@pytest.fixture
def lighthouse_result() -> Callable[..., dict[str, Any]]:
    """Factory for raw Lighthouse result dictionaries."""

    def _make(
        performance: float | None = 0.85,
        accessibility: float | None = 0.92,
        seo: float | None = 1.0,
        best_practices: float | None = 0.96,
    ) -> dict[str, Any]:
        return {
            "lighthouseVersion": "12.0.0",
            "categories": {
                "performance": {"score": performance},
                "accessibility": {"score": accessibility},
                "seo": {"score": seo},
                "best-practices": {"score": best_practices},
            },
            "audits": {
                "first-contentful-paint": _audit("First Contentful Paint", 0.95, "1.1 s"),
                "largest-contentful-paint": _audit("Largest Contentful Paint", 0.5, "3.4 s"),
                "interactive": _audit("Time to Interactive", 0.7, "4.0 s"),
                "cumulative-layout-shift": _audit("Cumulative Layout Shift", 1, "0.02"),
                "max-potential-fid": _audit("Max Potential First Input Delay", 0.3, "250 ms"),
                "render-blocking-resources": _audit("Eliminate render-blocking resources", 0),
                "diagnostics": _audit("Diagnostics", None),
            },
        }

    return _make
