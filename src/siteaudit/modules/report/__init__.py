"""Report synthesis: recommendations, rendering, summary and persistence."""

from .json_report import render_json, report_to_dict
from .markdown_report import append_summary, format_score, render_base_markdown, render_markdown
from .models import NO_ISSUES_PLACEHOLDER, Report
from .recommendations import build_recommendations, simplify_audits
from .summary import SummaryRequestor
from .writer import ReportWriter, report_file_name

__all__ = [
    "NO_ISSUES_PLACEHOLDER",
    "Report",
    "ReportWriter",
    "SummaryRequestor",
    "append_summary",
    "build_recommendations",
    "format_score",
    "render_base_markdown",
    "render_json",
    "render_markdown",
    "report_file_name",
    "report_to_dict",
    "simplify_audits",
]
