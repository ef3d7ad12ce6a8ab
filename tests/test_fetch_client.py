import json

import httpx
import pytest

from shared.clients.fetch.FetchClientManager import FetchClientManager
from shared.clients.fetch.http.FetchClientHttp import FetchClientHttp
from shared.models.errors import NetworkError, ParseError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("FETCH_ENGINE", "FETCH_TIMEOUT", "FETCH_HTTP_BASE_URL", "FETCH_HTTP_API_KEY"):
        monkeypatch.delenv(key, raising=False)


async def _booted_client(helper_config, handler) -> FetchClientHttp:
    client = FetchClientHttp(helper_config=helper_config)
    await client.boot(transport=httpx.MockTransport(handler))
    return client


@pytest.mark.asyncio
async def test_array_body_is_returned(helper_config) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

    client = await _booted_client(helper_config, handler)
    try:
        body = await client.fetch_page("http://api.test/users?search=al")
    finally:
        await client.close()

    assert body == [{"id": 1}, {"id": 2}]
    assert str(seen[0].url) == "http://api.test/users?search=al"
    assert seen[0].headers["accept"] == "application/json"
    assert "x-api-key" not in seen[0].headers


@pytest.mark.asyncio
async def test_object_body_is_returned(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(200, json={"results": [], "next": None}))
    try:
        assert await client.fetch_page("http://api.test/users/paged") == {"results": [], "next": None}
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_non_success_status_is_a_network_error(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(500, json={"detail": "boom"}))
    try:
        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_page("http://api.test/users")
    finally:
        await client.close()

    assert exc_info.value.status_code == 500
    assert exc_info.value.url == "http://api.test/users"


@pytest.mark.asyncio
async def test_transport_failure_is_a_network_error(helper_config) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = await _booted_client(helper_config, handler)
    try:
        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_page("http://api.test/users")
    finally:
        await client.close()

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_is_a_parse_error(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(200, text="<html>oops</html>"))
    try:
        with pytest.raises(ParseError):
            await client.fetch_page("http://api.test/users")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_scalar_json_is_a_parse_error(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(200, content=json.dumps(42).encode()))
    try:
        with pytest.raises(ParseError):
            await client.fetch_page("http://api.test/users")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_relative_urls_use_the_base_url_and_api_key(helper_config, monkeypatch) -> None:
    monkeypatch.setenv("FETCH_HTTP_BASE_URL", "http://api.test/v1/")
    monkeypatch.setenv("FETCH_HTTP_API_KEY", "secret")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = await _booted_client(helper_config, handler)
    try:
        await client.fetch_page("/users?page=2")
    finally:
        await client.close()

    assert str(seen[0].url) == "http://api.test/v1/users?page=2"
    assert seen[0].headers["x-api-key"] == "secret"


@pytest.mark.asyncio
async def test_relative_url_without_base_url_is_a_network_error(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(200, json=[]))
    try:
        with pytest.raises(NetworkError):
            await client.fetch_page("/users")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_requests_need_a_booted_client(helper_config) -> None:
    client = FetchClientHttp(helper_config=helper_config)
    assert not client.is_booted()
    with pytest.raises(RuntimeError):
        await client.fetch_page("http://api.test/users")


@pytest.mark.asyncio
async def test_close_releases_the_client(helper_config) -> None:
    client = await _booted_client(helper_config, lambda request: httpx.Response(200, json=[]))
    assert client.is_booted()
    await client.close()
    assert not client.is_booted()


def test_timeout_is_read_from_the_environment(helper_config, monkeypatch) -> None:
    monkeypatch.setenv("FETCH_TIMEOUT", "2.5")
    assert FetchClientHttp(helper_config=helper_config).timeout == 2.5


def test_manager_builds_the_configured_engine(helper_config, monkeypatch) -> None:
    assert isinstance(FetchClientManager(helper_config=helper_config).get_client(), FetchClientHttp)

    monkeypatch.setenv("FETCH_ENGINE", "carrier-pigeon")
    with pytest.raises(ValueError):
        FetchClientManager(helper_config=helper_config)
