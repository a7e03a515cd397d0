"""Threshold rules that turn scores and findings into recommendations."""

from siteaudit.modules.quality.models import QualityResult

from .models import NO_ISSUES_PLACEHOLDER, Report

SCORE_THRESHOLD = 90
AUDIT_THRESHOLD = 0.9

PERFORMANCE_ADVICE = "Optimize images, reduce JavaScript, and improve time to interactive."
ACCESSIBILITY_ADVICE = (
    "Review accessibility issues such as color contrast, alt text, and ARIA labels."
)
HTTPS_ADVICE = "Enforce HTTPS by redirecting all HTTP traffic to HTTPS."


def build_recommendations(report: Report) -> tuple[str, ...]:
    """Apply the rules in fixed order: performance, accessibility, HTTPS."""
    recommendations: list[str] = []
    profiles = report.present_profiles()

    for profile in profiles:
        if report.quality[profile].performance_score < SCORE_THRESHOLD:
            recommendations.append(f"{profile.label}: {PERFORMANCE_ADVICE}")

    for profile in profiles:
        if report.quality[profile].accessibility_score < SCORE_THRESHOLD:
            recommendations.append(f"{profile.label}: {ACCESSIBILITY_ADVICE}")
    if report.accessibility:
        count = len(report.accessibility)
        noun = "issue" if count == 1 else "issues"
        recommendations.append(
            f"Fix the {count} accessibility {noun} reported by the accessibility checker."
        )

    if not report.security.https_redirect_passed:
        recommendations.append(HTTPS_ADVICE)

    return tuple(recommendations) or (NO_ISSUES_PLACEHOLDER,)


def simplify_audits(result: QualityResult) -> list[dict[str, object]]:
    """Audits scoring below 0.9, as ``{title, description, score, display_value}``.

    Scores are on a 0..100 scale and audits are ordered by id. Informative
    audits without a numeric score are left out.
    """
    simplified = []
    for _, entry in sorted(result.audits.items()):
        if entry.score is None or entry.score >= AUDIT_THRESHOLD:
            continue
        simplified.append(
            {
                "title": entry.title,
                "description": entry.description,
                "score": round(entry.score * 100, 2),
                "display_value": entry.display_value,
            }
        )
    return simplified
