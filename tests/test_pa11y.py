"""Tests for the pa11y checker adapter."""

import json

import pytest

from siteaudit.errors import ProbeFailure
from siteaudit.modules.quality import AccessibilityIssue, CommandResult, Pa11yChecker
from siteaudit.modules.quality import normalize_pa11y_issues

ISSUES = [
    {"code": "WCAG2AA.Principle1.Guideline1_1.1_1_1.H37", "message": "Img element missing an alt"},
    {"code": "WCAG2AA.Principle1.Guideline1_4.1_4_3.G18.Fail", "message": "Low contrast "},
]


class TestNormalizePa11yIssues:
    """Test payload shapes accepted from pa11y."""

    def test_bare_list(self):
        assert normalize_pa11y_issues(ISSUES) == (
            AccessibilityIssue(
                message="Img element missing an alt",
                code="WCAG2AA.Principle1.Guideline1_1.1_1_1.H37",
            ),
            AccessibilityIssue(
                message="Low contrast", code="WCAG2AA.Principle1.Guideline1_4.1_4_3.G18.Fail"
            ),
        )

    def test_wrapped_issues(self):
        issues = normalize_pa11y_issues({"documentTitle": "Home", "issues": ISSUES})
        assert [issue.message for issue in issues] == ["Img element missing an alt", "Low contrast"]

    def test_empty_payloads(self):
        assert normalize_pa11y_issues([]) == ()
        assert normalize_pa11y_issues({}) == ()

    def test_non_dict_items_are_skipped(self):
        assert len(normalize_pa11y_issues(["junk", ISSUES[0]])) == 1

    @pytest.mark.parametrize("payload", ["issues", 3, None])
    def test_unexpected_payload_fails(self, payload):
        with pytest.raises(ProbeFailure):
            normalize_pa11y_issues(payload)


class TestPa11yChecker:
    """Test invocation of the pa11y CLI."""

    @pytest.mark.asyncio
    async def test_check_uses_json_reporter_and_accepts_exit_2(self):
        calls = []

        async def runner(command, **kwargs):
            calls.append((command, kwargs))
            return CommandResult(command, 2, json.dumps(ISSUES), "")

        checker = Pa11yChecker("/usr/bin/pa11y", timeout=45, command_runner=runner)
        payload = await checker.check("https://example.com/")

        assert payload == ISSUES
        command, kwargs = calls[0]
        assert command == ["/usr/bin/pa11y", "--reporter", "json", "https://example.com/"]
        assert kwargs["allowed_exit_codes"] == (0, 2)
        assert kwargs["timeout"] == 45

    @pytest.mark.asyncio
    async def test_empty_output_means_no_issues(self):
        async def runner(command, **kwargs):
            return CommandResult(command, 0, "  \n", "")

        checker = Pa11yChecker("pa11y", command_runner=runner)
        assert await checker.check("https://example.com/") == []

    @pytest.mark.asyncio
    async def test_invalid_json_fails(self):
        async def runner(command, **kwargs):
            return CommandResult(command, 0, "<html>", "")

        checker = Pa11yChecker("pa11y", command_runner=runner)
        with pytest.raises(ProbeFailure, match="invalid JSON"):
            await checker.check("https://example.com/")
