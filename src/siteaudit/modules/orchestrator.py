"""Top-level audit workflow: normalize, probe, synthesize, summarize."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from contextlib import AsyncExitStack
from dataclasses import dataclass, replace
from enum import Enum

from siteaudit.config import AuditSettings
from siteaudit.modules.quality import (
    ALL_PROFILES,
    BrowserHandle,
    BrowserLauncher,
    ChromeLauncher,
    DeviceProfile,
    LighthouseEngine,
    Pa11yChecker,
    QualityOutcome,
    QualityProbeAdapter,
    browser_session,
)
from siteaudit.modules.report import (
    Report,
    SummaryRequestor,
    build_recommendations,
    render_markdown,
)
from siteaudit.modules.results import ProbeResult, value_or
from siteaudit.modules.security import SecurityAggregator, SecurityPosture
from siteaudit.modules.target import Target, normalize_url

logger = logging.getLogger(__name__)


class AuditPhase(Enum):
    START = "start"
    NORMALIZING = "normalizing"
    PROBING = "probing"
    SYNTHESIZING = "synthesizing"
    SUMMARIZING = "summarizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class AuditOutcome:
    """The final report and its rendered artifact."""

    report: Report
    artifact: str


class AuditOrchestrator:
    """Run every probe for one target and assemble the report.

    Quality and security probes run concurrently and never raise; only an
    invalid URL or an unexpected error moves the run to FAILED. The browser is
    released on every exit path.
    """

    def __init__(
        self,
        quality: QualityProbeAdapter,
        security: SecurityAggregator,
        browser_launcher: BrowserLauncher,
        summarizer: SummaryRequestor | None = None,
        profiles: Sequence[DeviceProfile] = ALL_PROFILES,
        renderer: Callable[[Report], str] = render_markdown,
        headless: bool = True,
    ):
        self.quality = quality
        self.security = security
        self.browser_launcher = browser_launcher
        self.summarizer = summarizer
        self.profiles = tuple(dict.fromkeys(profiles))
        self.renderer = renderer
        self.headless = headless
        self.phase = AuditPhase.START
        self.history: list[AuditPhase] = [AuditPhase.START]

    @classmethod
    def from_settings(
        cls,
        settings: AuditSettings,
        profiles: Sequence[DeviceProfile] = ALL_PROFILES,
        summarize: bool = True,
        renderer: Callable[[Report], str] = render_markdown,
    ) -> "AuditOrchestrator":
        """Wire the default Lighthouse, pa11y, Chrome and LLM collaborators."""
        quality = QualityProbeAdapter(
            engine=LighthouseEngine(settings.lighthouse_bin, timeout=settings.engine_timeout),
            checker=Pa11yChecker(settings.pa11y_bin, timeout=settings.engine_timeout),
        )
        security = SecurityAggregator(
            port_timeout=settings.port_timeout,
            http_timeout=settings.http_timeout,
            dns_timeout=settings.http_timeout,
        )
        return cls(
            quality=quality,
            security=security,
            browser_launcher=ChromeLauncher(settings.chrome_path),
            summarizer=SummaryRequestor(settings.llm) if summarize else None,
            profiles=profiles,
            renderer=renderer,
        )

    def _enter(self, phase: AuditPhase) -> None:
        logger.debug("Audit phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.history.append(phase)

    async def run(self, raw_input: str) -> AuditOutcome:
        try:
            self._enter(AuditPhase.NORMALIZING)
            target = normalize_url(raw_input)
            logger.info("Auditing website: %s", target.normalized_url)

            self._enter(AuditPhase.PROBING)
            quality, security = await self._probe(target)

            self._enter(AuditPhase.SYNTHESIZING)
            report = self.assemble(target, quality, security)
            artifact = self.renderer(report)

            self._enter(AuditPhase.SUMMARIZING)
            report, artifact = await self._summarize(report, artifact)
        except Exception:
            self._enter(AuditPhase.FAILED)
            raise

        self._enter(AuditPhase.DONE)
        return AuditOutcome(report=report, artifact=artifact)

    async def _probe(self, target: Target) -> tuple[QualityOutcome, SecurityPosture]:
        # Only the device profiles wait for the browser
        async with asyncio.TaskGroup() as group:
            profiles_task = group.create_task(self._run_profiles(target))
            accessibility_task = group.create_task(self.quality.check_accessibility(target))
            security_task = group.create_task(self.security.assess(target))
        quality = QualityOutcome(
            results=profiles_task.result(),
            accessibility=accessibility_task.result(),
        )
        return quality, security_task.result()

    async def _run_profiles(self, target: Target) -> dict[DeviceProfile, ProbeResult]:
        async with AsyncExitStack() as stack:
            browser, browser_error = await self._start_browser(stack)
            return await self.quality.run_profiles(target, browser, self.profiles, browser_error)

    async def _start_browser(
        self, stack: AsyncExitStack
    ) -> tuple[BrowserHandle | None, str | None]:
        if not self.profiles:
            return None, "no device profiles requested"
        try:
            browser = await stack.enter_async_context(
                browser_session(self.browser_launcher, headless=self.headless)
            )
        except Exception as exc:
            logger.warning("Browser launch failed: %s", exc)
            return None, str(exc)
        return browser, None

    def assemble(
        self, target: Target, quality: QualityOutcome, security: SecurityPosture
    ) -> Report:
        """Merge probe results by key and attach the recommendations."""
        report = Report(
            target=target,
            security=security,
            quality=quality.succeeded(),
            requested_profiles=self.profiles,
            accessibility=value_or(quality.accessibility, ()),
            accessibility_checked=quality.accessibility.ok,
        )
        return replace(report, recommendations=build_recommendations(report))

    async def _summarize(self, report: Report, artifact: str) -> tuple[Report, str]:
        if self.summarizer is None:
            return report, artifact
        return await self.summarizer.append(report, artifact, self.renderer)
