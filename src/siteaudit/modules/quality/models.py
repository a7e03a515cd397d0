"""Data models for the page quality and accessibility probes."""

from dataclasses import dataclass, field
from enum import Enum

from siteaudit.modules.results import Failed, ProbeResult


class DeviceProfile(Enum):
    """Emulation settings the rendering engine runs under."""

    MOBILE = ("mobile", False)
    DESKTOP = ("desktop", True)

    def __init__(self, form_factor: str, screen_emulation_disabled: bool):
        self.form_factor = form_factor
        self.screen_emulation_disabled = screen_emulation_disabled

    @property
    def label(self) -> str:
        return self.form_factor.capitalize()

    @classmethod
    def parse(cls, value: str) -> "DeviceProfile":
        normalized = value.strip().lower()
        for profile in cls:
            if profile.form_factor == normalized:
                return profile
        choices = ", ".join(p.form_factor for p in cls)
        raise ValueError(f"Unknown device profile {value!r} (choose from: {choices})")


ALL_PROFILES: tuple[DeviceProfile, ...] = tuple(DeviceProfile)


@dataclass(frozen=True)
class AuditEntry:
    """One rendering-engine audit. ``score`` is None for informative audits."""

    title: str
    description: str
    score: float | None
    display_value: str = ""


@dataclass(frozen=True)
class CoreWebVitals:
    lcp: str
    fid: str
    cls: str


@dataclass(frozen=True)
class PerformanceMetrics:
    fcp: str
    lcp: str
    tti: str
    cls: str


@dataclass(frozen=True)
class QualityResult:
    """Normalized scores for one device profile. Scores are on a 0..100 scale."""

    seo_score: float
    accessibility_score: float
    performance_score: float
    best_practices_score: float
    core_web_vitals: CoreWebVitals
    metrics: PerformanceMetrics
    audits: dict[str, AuditEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class AccessibilityIssue:
    """One rule violation reported by the accessibility checker."""

    message: str
    code: str


@dataclass
class QualityOutcome:
    """Per-profile rendering results plus the accessibility check result."""

    results: dict[DeviceProfile, ProbeResult[QualityResult]] = field(default_factory=dict)
    accessibility: ProbeResult[tuple[AccessibilityIssue, ...]] = Failed("not run")

    def succeeded(self) -> dict[DeviceProfile, QualityResult]:
        """Return only the profiles whose run produced a result."""
        return {
            profile: result.value
            for profile, result in self.results.items()
            if not isinstance(result, Failed)
        }
