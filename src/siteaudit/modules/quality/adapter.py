"""Runs the rendering engine per device profile and the accessibility checker.

The two halves are independent: the checker needs no browser, so the
orchestrator schedules them as separate tasks.
"""

import logging
from collections.abc import Sequence

from siteaudit.modules.results import Failed, Ok, ProbeResult
from siteaudit.modules.target import Target

from .browser import BrowserHandle
from .lighthouse import RenderingEngine, normalize_lighthouse_result
from .models import ALL_PROFILES, AccessibilityIssue, DeviceProfile, QualityResult
from .pa11y import AccessibilityChecker, normalize_pa11y_issues

logger = logging.getLogger(__name__)


class QualityProbeAdapter:
    """Normalize engine and checker output into the report data model.

    Every failure is contained here and turned into ``Failed`` for the one
    result it affects.
    """

    def __init__(self, engine: RenderingEngine, checker: AccessibilityChecker):
        self.engine = engine
        self.checker = checker

    async def run_profiles(
        self,
        target: Target,
        browser: BrowserHandle | None,
        profiles: Sequence[DeviceProfile] = ALL_PROFILES,
        browser_error: str | None = None,
    ) -> dict[DeviceProfile, ProbeResult[QualityResult]]:
        """Audit each profile on ``browser``; without a browser every profile fails."""
        # Profiles share one browser, so they run one after another
        results: dict[DeviceProfile, ProbeResult[QualityResult]] = {}
        for profile in profiles:
            if browser is None:
                reason = f"browser unavailable: {browser_error or 'not launched'}"
                logger.warning("Skipping %s audit, %s", profile.label, reason)
                results[profile] = Failed(reason)
                continue
            results[profile] = await self.run_profile(target, profile, browser)
        return results

    async def run_profile(
        self, target: Target, profile: DeviceProfile, browser: BrowserHandle
    ) -> ProbeResult[QualityResult]:
        logger.info("Running %s audit for %s", profile.label, target.normalized_url)
        try:
            lhr = await self.engine.run(target.normalized_url, profile, browser.port)
            result = normalize_lighthouse_result(lhr)
        except Exception as exc:
            logger.warning("%s audit failed: %s", profile.label, exc)
            return Failed(f"{profile.label} audit failed: {exc}")
        return Ok(result)

    async def check_accessibility(
        self, target: Target
    ) -> ProbeResult[tuple[AccessibilityIssue, ...]]:
        try:
            payload = await self.checker.check(target.normalized_url)
            issues = normalize_pa11y_issues(payload)
        except Exception as exc:
            logger.warning("Accessibility check failed: %s", exc)
            return Failed(f"accessibility check failed: {exc}")
        logger.info("Accessibility check found %d issues", len(issues))
        return Ok(issues)
