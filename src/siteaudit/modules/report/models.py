"""The aggregate report assembled for one audit run."""

from dataclasses import dataclass, field

from siteaudit.modules.quality.models import (
    ALL_PROFILES,
    AccessibilityIssue,
    DeviceProfile,
    QualityResult,
)
from siteaudit.modules.security.models import SecurityPosture
from siteaudit.modules.target import Target

NO_ISSUES_PLACEHOLDER = "No major issues found."


@dataclass(frozen=True)
class Report:
    """Everything one run found. Profiles whose audit failed are absent from ``quality``."""

    target: Target
    security: SecurityPosture
    quality: dict[DeviceProfile, QualityResult] = field(default_factory=dict)
    requested_profiles: tuple[DeviceProfile, ...] = ALL_PROFILES
    accessibility: tuple[AccessibilityIssue, ...] = ()
    accessibility_checked: bool = True
    recommendations: tuple[str, ...] = ()
    generated_summary: str | None = None

    def present_profiles(self) -> list[DeviceProfile]:
        """Profiles with data, in canonical (declaration) order."""
        return [profile for profile in DeviceProfile if profile in self.quality]

    def ordered_requested_profiles(self) -> list[DeviceProfile]:
        return [profile for profile in DeviceProfile if profile in self.requested_profiles]
