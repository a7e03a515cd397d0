"""Markdown rendering of a Report.

Rendering is pure: the same Report always yields the same text.
"""

from siteaudit.modules.quality.models import DeviceProfile, QualityResult

from .models import Report
from .recommendations import build_recommendations, simplify_audits

SUMMARY_HEADING = "## AI Summary"


def format_score(value: float) -> str:
    """Print scores without float noise or a trailing ``.0``."""
    return f"{round(value, 2):g}"


def _summary_lines(report: Report) -> list[str]:
    lines = ["## Summary"]
    for profile in report.ordered_requested_profiles():
        result = report.quality.get(profile)
        label = profile.label
        if result is None:
            lines.append(f"- **{label} Scores**: Unavailable (audit failed)")
            continue
        lines.extend(
            [
                f"- **{label} SEO Score**: {format_score(result.seo_score)}",
                f"- **{label} Accessibility Score**: {format_score(result.accessibility_score)}",
                f"- **{label} Performance Score**: {format_score(result.performance_score)}",
                f"- **{label} Best Practices Score**: "
                f"{format_score(result.best_practices_score)}",
            ]
        )
    return lines


def _metrics_lines(profile: DeviceProfile, result: QualityResult) -> list[str]:
    metrics = result.metrics
    vitals = result.core_web_vitals
    return [
        f"### {profile.label}:",
        f"- **First Contentful Paint (FCP)**: {metrics.fcp}",
        f"- **Largest Contentful Paint (LCP)**: {metrics.lcp}",
        f"- **Time to Interactive (TTI)**: {metrics.tti}",
        f"- **Cumulative Layout Shift (CLS)**: {metrics.cls}",
        "",
        f"#### Core Web Vitals ({profile.label})",
        f"- **Largest Contentful Paint (LCP)**: {vitals.lcp}",
        f"- **First Input Delay (FID)**: {vitals.fid}",
        f"- **Cumulative Layout Shift (CLS)**: {vitals.cls}",
        "",
    ]


def _audit_lines(report: Report) -> list[str]:
    lines = ["### Lighthouse Audit Details"]
    profiles = report.present_profiles()
    if not profiles:
        lines.append("No Lighthouse data available.")
        return lines
    for profile in profiles:
        lines.append(f"#### {profile.label}")
        audits = simplify_audits(report.quality[profile])
        if not audits:
            lines.append("All audits passed.")
        for audit in audits:
            detail = f"Score: {format_score(audit['score'])}"
            if audit["display_value"]:
                detail += f", measured: {audit['display_value']}"
            lines.append(f"- **{audit['title']}**: {audit['description']} ({detail})")
        lines.append("")
    if lines[-1] == "":
        lines.pop()
    return lines


def _accessibility_lines(report: Report) -> list[str]:
    lines = ["### Pa11y Accessibility Issues"]
    if not report.accessibility_checked:
        lines.append("Accessibility check unavailable.")
    elif not report.accessibility:
        lines.append("No accessibility issues found.")
    else:
        lines.extend(f"- {issue.message} ({issue.code})" for issue in report.accessibility)
    return lines


def _security_lines(report: Report) -> list[str]:
    security = report.security
    lines = [
        "### Security Checks",
        f"- **HTTPS Redirect**: {'Passed' if security.https_redirect_passed else 'Failed'}",
        "- **Open Ports**:",
    ]
    lines.extend(f"  - {status.describe()}" for status in security.open_ports)
    if security.dns_txt_records:
        lines.append("- **DNS TXT Records**:")
        lines.extend(f"  - {' '.join(record)}" for record in security.dns_txt_records)
    else:
        lines.append("- **DNS TXT Records**: No DNS TXT records found")
    return lines


def render_base_markdown(report: Report) -> str:
    """Render every section except the generated summary."""
    recommendations = report.recommendations or build_recommendations(report)

    lines = [f"# Website Audit Report for: {report.target.normalized_url}", ""]
    lines.extend(_summary_lines(report))
    lines.append("")

    present = report.present_profiles()
    if present:
        lines.append("## Detailed Performance Metrics")
        for profile in present:
            lines.extend(_metrics_lines(profile, report.quality[profile]))

    lines.append("## Recommendations:")
    lines.extend(f"- {item}" for item in recommendations)
    lines.append("")

    lines.append("## Detailed Report")
    lines.append("")
    lines.extend(_audit_lines(report))
    lines.append("")
    lines.extend(_accessibility_lines(report))
    lines.append("")
    lines.extend(_security_lines(report))
    return "\n".join(lines) + "\n"


def append_summary(artifact: str, summary: str) -> str:
    """Attach a generated summary as a trailing, clearly delimited section."""
    return f"{artifact}\n{SUMMARY_HEADING}\n{summary.strip()}\n"


def render_markdown(report: Report) -> str:
    """Render the full artifact, including the generated summary when present."""
    artifact = render_base_markdown(report)
    if report.generated_summary:
        artifact = append_summary(artifact, report.generated_summary)
    return artifact
