"""Tests for request construction: URLs, headers, credential placement."""

from __future__ import annotations

import asyncio

import httpx

from dblu_sdk.adapters.dblu_client import DBLUClient
from dblu_sdk.adapters.http_client import build_async_client
from dblu_sdk.core.config import PRODUCTION_BASE_URL, AppSettings
from dblu_sdk.core.interfaces.api import PersonaAPI
from tests.conftest import BASE_URL, json_response, personas_payload, prompt_payload


def test_default_base_url_is_production() -> None:
    assert DBLUClient().base_url == PRODUCTION_BASE_URL


def test_base_url_from_settings() -> None:
    client = DBLUClient(settings=AppSettings(base_url="http://127.0.0.1:8000"))
    assert client.base_url == "http://127.0.0.1:8000"


def test_construction_does_not_validate_url() -> None:
    assert DBLUClient("not a url").base_url == "not a url"


def test_client_satisfies_protocol() -> None:
    assert isinstance(DBLUClient(), PersonaAPI)


def test_sdk_headers_on_every_request(make_client) -> None:
    client, server = make_client(json_response(200, personas_payload()))

    asyncio.run(client.list_personas("tok-123"))

    request = server.last
    assert request.method == "GET"
    assert request.url == httpx.URL(f"{BASE_URL}/api/v1/mcp/doubles")
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "DBLUSDK/1.0.0"
    assert request.headers["Authorization"] == "Bearer tok-123"


def test_health_sends_no_credentials(make_client) -> None:
    client, server = make_client(json_response(200, {"status": "ok"}))

    asyncio.run(client.ping())

    assert server.last.url.path == "/health"
    assert "Authorization" not in server.last.headers


def test_trailing_slash_in_base_url(make_client) -> None:
    client, server = make_client(json_response(200, {}), base_url=f"{BASE_URL}/")

    asyncio.run(client.ping())

    assert str(server.last.url) == f"{BASE_URL}/health"


def test_base_url_with_path_prefix(make_client) -> None:
    client, server = make_client(json_response(200, {}), base_url=f"{BASE_URL}/v2")

    asyncio.run(client.ping())

    assert server.last.url.path == "/v2/health"


def test_custom_token_header_and_raw_scheme(make_client) -> None:
    settings = AppSettings(token_header="X-MCP-Token", token_scheme="")
    client, server = make_client(json_response(200, personas_payload()), client_settings=settings)

    asyncio.run(client.list_personas("tok-123"))

    assert server.last.headers["X-MCP-Token"] == "tok-123"
    assert "Authorization" not in server.last.headers


def test_custom_paths(make_client) -> None:
    settings = AppSettings(prompt_path="/prompt/run")
    client, server = make_client(json_response(200, prompt_payload()), client_settings=settings)

    asyncio.run(client.execute_prompt("tok", "hi", "pk"))

    assert server.last.url.path == "/prompt/run"


def test_calls_do_not_share_state(make_client) -> None:
    client, server = make_client(json_response(200, personas_payload()))

    async def _both():
        return await asyncio.gather(client.list_personas("tok-a"), client.list_personas("tok-b"))

    first, second = asyncio.run(_both())

    assert len(server.requests) == 2
    assert {r.headers["Authorization"] for r in server.requests} == {"Bearer tok-a", "Bearer tok-b"}
    assert first == second


def test_build_async_client_defaults() -> None:
    settings = AppSettings(user_agent="custom/1.0", http_timeout_seconds=7)

    async def _check():
        async with build_async_client(settings, extra_headers={"X-Extra": "1"}) as client:
            return client.headers, client.timeout

    headers, timeout = asyncio.run(_check())

    assert headers["User-Agent"] == "custom/1.0"
    assert headers["Accept"] == "application/json"
    assert headers["X-Extra"] == "1"
    assert timeout.read == 7
