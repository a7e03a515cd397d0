"""JSON rendering of a Report."""

import json
from dataclasses import asdict
from typing import Any

from .models import Report
from .recommendations import build_recommendations, simplify_audits


def report_to_dict(report: Report) -> dict[str, Any]:
    """Plain-data view of a report with profiles in canonical order."""
    quality: dict[str, Any] = {}
    for profile in report.ordered_requested_profiles():
        result = report.quality.get(profile)
        if result is None:
            quality[profile.form_factor] = None
            continue
        quality[profile.form_factor] = {
            "seo_score": result.seo_score,
            "accessibility_score": result.accessibility_score,
            "performance_score": result.performance_score,
            "best_practices_score": result.best_practices_score,
            "core_web_vitals": asdict(result.core_web_vitals),
            "metrics": asdict(result.metrics),
            "failing_audits": simplify_audits(result),
        }

    security = report.security
    return {
        "target": asdict(report.target),
        "quality": quality,
        "accessibility": {
            "checked": report.accessibility_checked,
            "issues": [asdict(issue) for issue in report.accessibility],
        },
        "security": {
            "https_redirect_passed": security.https_redirect_passed,
            "open_ports": [
                {"port": status.port, "state": status.state.value}
                for status in security.open_ports
            ],
            "dns_txt_records": [list(record) for record in security.dns_txt_records],
        },
        "recommendations": list(report.recommendations or build_recommendations(report)),
        "generated_summary": report.generated_summary,
    }


def render_json(report: Report) -> str:
    """Render the report as indented JSON. Deterministic for equal reports."""
    return json.dumps(report_to_dict(report), indent=2) + "\n"
