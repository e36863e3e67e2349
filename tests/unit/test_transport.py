"""Unit tests for HttpxTransport against a mocked HTTP layer."""

import json

import httpx
import pytest
import pytest_asyncio

from formulaic.exceptions import APIError, AuthenticationError, RateLimitError
from formulaic.transport import HttpxTransport

URL = "http://localhost:3000/api/models"


@pytest_asyncio.fixture
async def transport():
    t = HttpxTransport(timeout=5)
    yield t
    await t.aclose()


class TestHttpxTransport:
    @pytest.mark.asyncio
    async def test_get_returns_json(self, httpx_mock, transport):
        httpx_mock.add_response(method="GET", url=URL, json=[{"id": "m1"}])

        result = await transport.request(URL, "GET", headers={"Authorization": "Bearer k"})

        assert result == [{"id": "m1"}]
        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer k"

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, httpx_mock, transport):
        httpx_mock.add_response(method="POST", url=URL, json={"ok": True})

        await transport.request(URL, "POST", body={"models": ["m"]})

        request = httpx_mock.get_request()
        assert json.loads(request.read()) == {"models": ["m"]}
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_multipart_upload(self, httpx_mock, transport):
        httpx_mock.add_response(method="POST", url=URL, json={"id": "f1"})

        await transport.request(URL, "POST", files={"file": ("a.txt", b"hello")})

        request = httpx_mock.get_request()
        content = request.read()
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="file"; filename="a.txt"' in content
        assert b"hello" in content

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self, httpx_mock, transport):
        httpx_mock.add_response(method="DELETE", url=URL, status_code=204)
        assert await transport.request(URL, "DELETE") is None

    @pytest.mark.asyncio
    async def test_text_body_returned_as_text(self, httpx_mock, transport):
        httpx_mock.add_response(method="GET", url=URL, text="plain")
        assert await transport.request(URL) == "plain"

    @pytest.mark.asyncio
    async def test_server_error(self, httpx_mock, transport):
        httpx_mock.add_response(method="GET", url=URL, status_code=500)

        with pytest.raises(APIError) as exc_info:
            await transport.request(URL)

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "500 - Internal Server Error"

    @pytest.mark.asyncio
    async def test_error_detail_included(self, httpx_mock, transport):
        httpx_mock.add_response(
            method="GET", url=URL, status_code=404, json={"message": "Recipe not found"}
        )
        with pytest.raises(APIError, match="404 - Not Found: Recipe not found"):
            await transport.request(URL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_errors(self, httpx_mock, transport, status):
        httpx_mock.add_response(method="GET", url=URL, status_code=status)
        with pytest.raises(AuthenticationError) as exc_info:
            await transport.request(URL)
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_rate_limit(self, httpx_mock, transport):
        httpx_mock.add_response(method="GET", url=URL, status_code=429)
        with pytest.raises(RateLimitError):
            await transport.request(URL)

    @pytest.mark.asyncio
    async def test_timeout(self, httpx_mock, transport):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))
        with pytest.raises(APIError, match="timed out after 5s"):
            await transport.request(URL)

    @pytest.mark.asyncio
    async def test_network_error(self, httpx_mock, transport):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))
        with pytest.raises(APIError, match="connection refused") as exc_info:
            await transport.request(URL)
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, httpx_mock, transport):
        httpx_mock.add_response(method="GET", url=URL, status_code=503)
        with pytest.raises(APIError):
            await transport.request(URL)
        assert len(httpx_mock.get_requests()) == 1


class TestHttpxTransportLifecycle:
    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        transport = HttpxTransport()
        await transport.aclose()
        assert transport._client.is_closed

    @pytest.mark.asyncio
    async def test_given_client_left_open(self, httpx_mock):
        httpx_mock.add_response(method="GET", url=URL, json=[])
        async with httpx.AsyncClient() as shared:
            transport = HttpxTransport(client=shared)
            await transport.aclose()

            assert not shared.is_closed
            assert await transport.request(URL) == []
