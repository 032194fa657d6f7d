"""공유 HTTP 클라이언트 Unit 테스트 (AsyncSession은 Mock)"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from curl_cffi import CurlError

from src.core.exceptions import UpstreamConnectionException
from src.upstream.http_client import SharedHttpClient

URL = "https://games.roblox.com/v2/users/1/games"


def make_session(response=None, error=None) -> MagicMock:
    session = MagicMock()
    session.get = AsyncMock(return_value=response, side_effect=error)
    session.close = AsyncMock()
    return session


def make_resp(status_code=200, payload=None, json_error=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.mark.asyncio
class TestSharedHttpClient:
    async def test_get_json_drops_none_params(self):
        session = make_session(make_resp(200, {"data": []}))
        with patch("src.upstream.http_client.AsyncSession", return_value=session):
            client = SharedHttpClient()
            response = await client.get_json(URL, params={"limit": 50, "sortOrder": "Asc", "cursor": None})

        assert response.status_code == 200
        assert response.payload == {"data": []}
        assert response.url == URL
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"limit": 50, "sortOrder": "Asc"}

    async def test_error_status_is_returned_not_raised(self):
        payload = {"errors": [{"message": "Too many requests"}]}
        session = make_session(make_resp(429, payload))
        with patch("src.upstream.http_client.AsyncSession", return_value=session):
            response = await SharedHttpClient().get_json(URL)

        assert response.status_code == 429
        assert response.ok is False
        assert response.payload == payload

    async def test_non_json_body(self):
        session = make_session(make_resp(502, json_error=ValueError("Expecting value")))
        with patch("src.upstream.http_client.AsyncSession", return_value=session):
            response = await SharedHttpClient().get_json(URL)

        assert response.status_code == 502
        assert response.payload is None

    async def test_transport_error_raises(self):
        session = make_session(error=CurlError("Failed to connect"))
        with patch("src.upstream.http_client.AsyncSession", return_value=session):
            with pytest.raises(UpstreamConnectionException) as exc_info:
                await SharedHttpClient().get_json(URL)

        assert exc_info.value.details["url"] == URL

    async def test_session_reused_and_closed(self):
        session = make_session(make_resp(200, {}))
        with patch("src.upstream.http_client.AsyncSession", return_value=session) as factory:
            client = SharedHttpClient()
            await client.get_json(URL)
            await client.get_json(URL)
            await client.close()
            await client.close()

        assert factory.call_count == 1
        session.close.assert_awaited_once()
