"""pa11y accessibility checker adapter."""

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from siteaudit.errors import ProbeFailure

from .models import AccessibilityIssue
from .runtime import resolve_binary, run_command

logger = logging.getLogger(__name__)

# pa11y exits with 2 when the page has issues
PA11Y_EXIT_CODES = (0, 2)


class AccessibilityChecker(Protocol):
    async def check(self, url: str) -> Any: ...


class Pa11yChecker:
    """Run pa11y with the JSON reporter."""

    name = "pa11y"

    def __init__(
        self,
        binary: str | None = None,
        timeout: float = 120.0,
        command_runner: Callable[..., Any] | None = None,
    ):
        self.binary = binary
        self.timeout = timeout
        self._runner = command_runner or run_command

    async def check(self, url: str) -> Any:
        binary = resolve_binary("pa11y", self.binary)
        if not binary:
            raise ProbeFailure("pa11y binary not found in PATH")

        result = await self._runner(
            [binary, "--reporter", "json", url],
            timeout=self.timeout,
            allowed_exit_codes=PA11Y_EXIT_CODES,
        )
        output = result.stdout.strip()
        if not output:
            return []
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise ProbeFailure(f"pa11y returned invalid JSON: {exc}") from exc


def normalize_pa11y_issues(payload: Any) -> tuple[AccessibilityIssue, ...]:
    """Accept ``{"issues": [...]}`` or a bare issue list; keep checker order."""
    if isinstance(payload, dict):
        payload = payload.get("issues", [])
    if not isinstance(payload, list):
        raise ProbeFailure(f"Unexpected pa11y payload type: {type(payload).__name__}")

    issues: list[AccessibilityIssue] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        issues.append(
            AccessibilityIssue(
                message=str(item.get("message") or "").strip(),
                code=str(item.get("code") or "").strip(),
            )
        )
    return tuple(issues)
