"""Tests for the HTTPS redirect probe."""

import httpx
import pytest
import respx
from httpx import Response

from siteaudit.modules.security import probe_https_redirect
from siteaudit.modules.target import normalize_url


class TestHttpsRedirect:
    """Test redirect detection."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_redirect_to_normalized_url_passes(self, target):
        route = respx.get("http://example.com/").mock(
            return_value=Response(301, headers={"Location": "https://example.com/"})
        )
        assert await probe_https_redirect(target) is True
        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_redirect_elsewhere_fails(self, target):
        respx.get("http://example.com/").mock(
            return_value=Response(302, headers={"Location": "https://www.example.com/"})
        )
        assert await probe_https_redirect(target) is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_redirect_fails(self, target):
        respx.get("http://example.com/").mock(return_value=Response(200, text="plain"))
        assert await probe_https_redirect(target) is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error_fails(self, target):
        respx.get("http://example.com/").mock(side_effect=httpx.ConnectError("refused"))
        assert await probe_https_redirect(target) is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout_fails(self, target):
        respx.get("http://example.com/").mock(side_effect=httpx.ReadTimeout("slow"))
        assert await probe_https_redirect(target) is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_path_must_match_exactly(self):
        target = normalize_url("https://example.com/shop")
        respx.get("http://example.com/").mock(
            return_value=Response(301, headers={"Location": "https://example.com/"})
        )
        assert await probe_https_redirect(target) is False
