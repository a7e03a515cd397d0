"""Page quality probes: rendering engine scores and accessibility issues."""

from .adapter import QualityProbeAdapter
from .browser import BrowserHandle, BrowserLauncher, ChromeLauncher, browser_session
from .lighthouse import LighthouseEngine, RenderingEngine, normalize_lighthouse_result
from .models import (
    ALL_PROFILES,
    AccessibilityIssue,
    AuditEntry,
    CoreWebVitals,
    DeviceProfile,
    PerformanceMetrics,
    QualityOutcome,
    QualityResult,
)
from .pa11y import AccessibilityChecker, Pa11yChecker, normalize_pa11y_issues
from .runtime import CommandResult, resolve_binary, run_command

__all__ = [
    "ALL_PROFILES",
    "AccessibilityChecker",
    "AccessibilityIssue",
    "AuditEntry",
    "BrowserHandle",
    "BrowserLauncher",
    "ChromeLauncher",
    "CommandResult",
    "CoreWebVitals",
    "DeviceProfile",
    "LighthouseEngine",
    "Pa11yChecker",
    "PerformanceMetrics",
    "QualityOutcome",
    "QualityProbeAdapter",
    "QualityResult",
    "RenderingEngine",
    "browser_session",
    "normalize_lighthouse_result",
    "normalize_pa11y_issues",
    "resolve_binary",
    "run_command",
]
