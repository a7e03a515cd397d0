"""Tests for the quality probe adapter."""

import asyncio

import pytest

from siteaudit.errors import ProbeFailure
from siteaudit.modules.quality import BrowserHandle, DeviceProfile, QualityProbeAdapter
from siteaudit.modules.results import Failed, Ok


class FakeEngine:
    def __init__(self, results: dict, delay: float = 0.0):
        self.results = results
        self.delay = delay
        self.calls: list[tuple[str, DeviceProfile, int]] = []
        self.active = 0
        self.max_active = 0

    async def run(self, url, profile, port):
        self.calls.append((url, profile, port))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
            outcome = self.results[profile]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.active -= 1


class FakeChecker:
    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload if payload is not None else []
        self.error = error

    async def check(self, url):
        if self.error:
            raise self.error
        return self.payload


async def _noop() -> None:
    return None


@pytest.fixture
def browser() -> BrowserHandle:
    return BrowserHandle(9222, _noop)


class TestRunProfiles:
    """Test per-profile containment of failures."""

    @pytest.mark.asyncio
    async def test_both_profiles_succeed(self, target, browser, lighthouse_result):
        engine = FakeEngine(
            {
                DeviceProfile.MOBILE: lighthouse_result(performance=0.5),
                DeviceProfile.DESKTOP: lighthouse_result(performance=0.99),
            }
        )
        results = await QualityProbeAdapter(engine, FakeChecker()).run_profiles(target, browser)

        assert results[DeviceProfile.MOBILE].value.performance_score == 50
        assert results[DeviceProfile.DESKTOP].value.performance_score == 99
        assert [call[2] for call in engine.calls] == [9222, 9222]

    @pytest.mark.asyncio
    async def test_profiles_run_one_at_a_time(self, target, browser, lighthouse_result):
        engine = FakeEngine(
            {profile: lighthouse_result() for profile in DeviceProfile}, delay=0.01
        )
        await QualityProbeAdapter(engine, FakeChecker()).run_profiles(target, browser)
        assert engine.max_active == 1

    @pytest.mark.asyncio
    async def test_one_profile_failure_keeps_the_other(self, target, browser, lighthouse_result):
        engine = FakeEngine(
            {
                DeviceProfile.MOBILE: lighthouse_result(),
                DeviceProfile.DESKTOP: ProbeFailure("navigation timeout"),
            }
        )
        results = await QualityProbeAdapter(engine, FakeChecker()).run_profiles(target, browser)

        assert isinstance(results[DeviceProfile.MOBILE], Ok)
        failed = results[DeviceProfile.DESKTOP]
        assert isinstance(failed, Failed)
        assert failed.reason == "Desktop audit failed: navigation timeout"

    @pytest.mark.asyncio
    async def test_malformed_result_fails_only_that_profile(
        self, target, browser, lighthouse_result
    ):
        engine = FakeEngine(
            {
                DeviceProfile.MOBILE: lighthouse_result(accessibility=None),
                DeviceProfile.DESKTOP: lighthouse_result(),
            }
        )
        results = await QualityProbeAdapter(engine, FakeChecker()).run_profiles(target, browser)
        assert isinstance(results[DeviceProfile.MOBILE], Failed)
        assert isinstance(results[DeviceProfile.DESKTOP], Ok)

    @pytest.mark.asyncio
    async def test_no_browser_fails_every_profile(self, target):
        engine = FakeEngine({})
        results = await QualityProbeAdapter(engine, FakeChecker()).run_profiles(
            target, None, browser_error="Chrome/Chromium not found"
        )

        assert engine.calls == []
        for profile in DeviceProfile:
            assert results[profile] == Failed("browser unavailable: Chrome/Chromium not found")

    @pytest.mark.asyncio
    async def test_requested_profiles_only(self, target, browser, lighthouse_result):
        engine = FakeEngine({DeviceProfile.DESKTOP: lighthouse_result()})
        results = await QualityProbeAdapter(engine, FakeChecker()).run_profiles(
            target, browser, profiles=(DeviceProfile.DESKTOP,)
        )
        assert list(results) == [DeviceProfile.DESKTOP]


class TestCheckAccessibility:
    @pytest.mark.asyncio
    async def test_issues_are_normalized(self, target):
        checker = FakeChecker({"issues": [{"message": "m", "code": "c"}]})
        result = await QualityProbeAdapter(FakeEngine({}), checker).check_accessibility(target)
        assert isinstance(result, Ok)
        assert result.value[0].code == "c"

    @pytest.mark.asyncio
    async def test_checker_failure_is_contained(self, target):
        checker = FakeChecker(error=ProbeFailure("pa11y binary not found in PATH"))
        result = await QualityProbeAdapter(FakeEngine({}), checker).check_accessibility(target)
        assert isinstance(result, Failed)
        assert "pa11y binary not found" in result.reason
