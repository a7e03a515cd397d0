"""Persists rendered reports to the reports directory."""

import logging
import re
import uuid
from pathlib import Path

from siteaudit.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)


def report_file_name(url: str, suffix: str = ".md", unique_id: str | None = None) -> str:
    """Sanitized URL plus a random disambiguating id."""
    slug = re.sub(r"[^a-zA-Z0-9]", "_", url)
    unique_id = unique_id or uuid.uuid4().hex[:12]
    return f"{slug}_{unique_id}{suffix}"


class ReportWriter:
    """Write report artifacts under one directory, creating it when needed."""

    def __init__(self, reports_dir: Path):
        self.reports_dir = Path(reports_dir)

    def write(self, content: str, url: str, suffix: str = ".md") -> Path:
        path = self.reports_dir / report_file_name(url, suffix)
        try:
            self.reports_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise CollaboratorUnavailable(f"Could not save report to {path}: {exc}") from exc
        logger.info("Report saved to %s", path)
        return path
