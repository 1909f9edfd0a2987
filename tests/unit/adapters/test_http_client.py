"""Unit tests for the aiohttp-backed HTTP client, against a local test server."""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from kiawah_concierge.adapters.http.client import HttpClient
from kiawah_concierge.config.settings import HttpSettings
from kiawah_concierge.domain.errors import DecodeError, TransportError

pytestmark = pytest.mark.unit


async def _json(request: web.Request) -> web.Response:
    return web.json_response({"station": request.query.get("station"), "ua": request.headers.get("User-Agent")})


async def _garbage(request: web.Request) -> web.Response:
    return web.Response(text="<html>not json</html>", content_type="text/html")


async def _missing(request: web.Request) -> web.Response:
    return web.Response(status=404, text="nope")


async def _image(request: web.Request) -> web.Response:
    return web.Response(body=b"\x89PNG\r\n", content_type="image/png")


@pytest_asyncio.fixture
async def server():
    app = web.Application()
    app.router.add_get("/json", _json)
    app.router.add_get("/garbage", _garbage)
    app.router.add_get("/missing", _missing)
    app.router.add_get("/image.png", _image)
    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest_asyncio.fixture
async def client():
    http = HttpClient(HttpSettings(user_agent="ConciergeTest/1.0"))
    await http.initialize()
    yield http
    await http.close()


class TestHttpClient:
    @pytest.mark.asyncio
    async def test_get_json_sends_params_and_user_agent(self, server, client):
        payload = await client.get_json(str(server.make_url("/json")), {"station": "8667062"}, source="tides")

        assert payload == {"station": "8667062", "ua": "ConciergeTest/1.0"}
        assert client.get_stats()["successful_requests"] == 1

    @pytest.mark.asyncio
    async def test_error_status_is_transport_error(self, server, client):
        with pytest.raises(TransportError) as exc_info:
            await client.get_json(str(server.make_url("/missing")), source="property")

        assert exc_info.value.status == 404
        assert exc_info.value.source == "property"
        assert exc_info.value.to_dict()["details"] == {"status": 404}
        assert client.get_stats()["failed_requests"] == 1

    @pytest.mark.asyncio
    async def test_non_json_body_is_decode_error(self, server, client):
        with pytest.raises(DecodeError):
            await client.get_json(str(server.make_url("/garbage")), source="open_meteo")

    @pytest.mark.asyncio
    async def test_get_bytes_keeps_content_type(self, server, client):
        image = await client.get_bytes(str(server.make_url("/image.png")), source="property")

        assert image.content == b"\x89PNG\r\n"
        assert image.content_type.startswith("image/png")

    @pytest.mark.asyncio
    async def test_connection_refused_is_transport_error(self, client):
        with pytest.raises(TransportError) as exc_info:
            await client.get_json("http://127.0.0.1:9/json", source="tides")
        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, server):
        async with HttpClient() as http:
            assert await http.get_json(str(server.make_url("/json"))) == {"station": None, "ua": "KiawahConcierge/1.0"}
        assert http._session is None
