"""siteaudit CLI - audit one website and save a report."""

import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from siteaudit.config import AuditSettings
from siteaudit.errors import CollaboratorUnavailable, FatalInputError
from siteaudit.modules.orchestrator import AuditOrchestrator
from siteaudit.modules.quality import ALL_PROFILES, DeviceProfile
from siteaudit.modules.report import ReportWriter, render_json, render_markdown
from siteaudit.utils.async_utils import safe_async_run
from siteaudit.utils.log import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="siteaudit",
    help="Audit a website: Lighthouse scores, accessibility issues and security checks",
    add_completion=False,
)
console = Console()

FORMATS = {"md": (render_markdown, ".md"), "json": (render_json, ".json")}


def _version_callback(value: bool) -> None:
    if not value:
        return
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("siteaudit")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"
    console.print(f"siteaudit {current_version}")
    raise typer.Exit()


def parse_devices(values: Sequence[str] | None) -> tuple[DeviceProfile, ...]:
    """Parse --device values; no values means every profile."""
    if not values:
        return ALL_PROFILES
    profiles: list[DeviceProfile] = []
    for value in values:
        for part in value.split(","):
            if part.strip():
                profiles.append(DeviceProfile.parse(part))
    return tuple(dict.fromkeys(profiles)) or ALL_PROFILES


def build_orchestrator(
    settings: AuditSettings,
    profiles: Sequence[DeviceProfile],
    summarize: bool,
    output_format: str,
) -> AuditOrchestrator:
    renderer, _ = FORMATS[output_format]
    return AuditOrchestrator.from_settings(
        settings, profiles=profiles, summarize=summarize, renderer=renderer
    )


@app.command()
def audit(
    url: Optional[str] = typer.Argument(None, help="Target URL or hostname"),
    device: Optional[list[str]] = typer.Option(
        None,
        "--device",
        "-d",
        help="Device profile to audit: mobile, desktop (repeatable; default both)",
    ),
    output_format: str = typer.Option("md", "--format", "-f", help="Report format: md or json"),
    reports_dir: Optional[Path] = typer.Option(
        None, "--reports-dir", help="Directory for saved reports (default: Reports)"
    ),
    no_summary: bool = typer.Option(False, "--no-summary", help="Skip the AI summary"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Run every probe against URL and save the report."""
    configure_logging(verbose)

    if not url or not url.strip():
        console.print("[red]Please provide a URL to audit.[/red]")
        raise typer.Exit(1)

    output_format = output_format.strip().lower()
    if output_format not in FORMATS:
        console.print(f"[red]Unknown format {escape(repr(output_format))}; use md or json.[/red]")
        raise typer.Exit(1)
    try:
        profiles = parse_devices(device)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    settings = AuditSettings.load()
    if reports_dir is not None:
        settings = replace(settings, reports_dir=reports_dir)

    orchestrator = build_orchestrator(settings, profiles, not no_summary, output_format)
    try:
        outcome = safe_async_run(orchestrator.run(url))
    except FatalInputError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except Exception as exc:
        logger.debug("Audit failed", exc_info=True)
        console.print(f"[red]Error auditing website: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    report = outcome.report
    _, suffix = FORMATS[output_format]
    saved = None
    try:
        saved = ReportWriter(settings.reports_dir).write(
            outcome.artifact, report.target.normalized_url, suffix=suffix
        )
    except CollaboratorUnavailable as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")

    failed_profiles = [
        profile.label
        for profile in report.ordered_requested_profiles()
        if profile not in report.quality
    ]
    lines = [f"[green]Audit complete for[/green] {escape(report.target.normalized_url)}"]
    if saved is not None:
        lines.append(f"Report saved to {escape(str(saved))}")
    if failed_profiles:
        lines.append(f"[yellow]Lighthouse unavailable for: {', '.join(failed_profiles)}[/yellow]")
    if not report.accessibility_checked:
        lines.append("[yellow]Accessibility check unavailable[/yellow]")
    lines.append("")
    lines.extend(f"- {escape(item)}" for item in report.recommendations)
    console.print(Panel("\n".join(lines), title="siteaudit", border_style="green"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
