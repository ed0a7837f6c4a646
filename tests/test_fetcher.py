"""Tests for the page fetcher."""
import httpx
import pytest

from imagesearch.config import settings
from imagesearch.exceptions import TransportError
from imagesearch.services.fetcher import fetch_bytes, fetch_page, is_blocked


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetchPage:
    @pytest.mark.asyncio
    async def test_returns_text_and_sends_user_agent(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["ua"] = request.headers.get("User-Agent")
            return httpx.Response(200, text="<html>ok</html>")

        async with _client(handler) as client:
            page = await fetch_page("https://www.google.com/search?q=x", client)

        assert page == "<html>ok</html>"
        assert seen["ua"] == settings.USER_AGENT

    @pytest.mark.asyncio
    async def test_non_2xx_raises_transport_error(self):
        async with _client(lambda request: httpx.Response(429)) as client:
            with pytest.raises(TransportError) as exc_info:
                await fetch_page("https://www.google.com/search?q=x", client)
        assert exc_info.value.status_code == 429
        assert exc_info.value.url == "https://www.google.com/search?q=x"

    @pytest.mark.asyncio
    async def test_network_error_raises_transport_error(self):
        def handler(request: httpx.Request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await fetch_bytes("https://www.google.com/search?q=x", client)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_single_request_no_retry(self):
        calls = []

        def handler(request: httpx.Request):
            calls.append(request.url)
            return httpx.Response(500)

        async with _client(handler) as client:
            with pytest.raises(TransportError):
                await fetch_page("https://www.google.com/search?q=x", client)
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_caller_client_left_open(self):
        client = _client(lambda request: httpx.Response(200, text="ok"))
        await fetch_page("https://example.com/", client)
        assert not client.is_closed
        await client.aclose()


class TestIsBlocked:
    def test_detects_captcha(self):
        assert is_blocked("<p>Our systems have detected Unusual Traffic</p>")
        assert is_blocked("<div id='captcha-form'></div>")

    def test_normal_page(self):
        assert not is_blocked("<html>AF_initDataCallback(...)</html>")
