"""Shared pytest fixtures and fake-server helpers for dblu_sdk tests."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Callable

import httpx
import pytest
from typer.testing import CliRunner

from dblu_sdk.adapters.dblu_client import DBLUClient
from dblu_sdk.core.config import AppSettings

BASE_URL = "https://api.test.dblu"

Handler = Callable[[httpx.Request], httpx.Response]

USER_ID = "6f1d2c3b-4a5e-4f60-8a7b-9c0d1e2f3a4b"
VAULT_ID_ADA = "0b7e2a9c-1d3f-4e5a-9b6c-7d8e9f0a1b2c"
VAULT_ID_BOB = "1c8f3b0d-2e4a-4f6b-8c7d-8e9f0a1b2c3d"


def user_info_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": USER_ID,
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@example.com",
        "emailVerified": True,
        "searchable": False,
        "profilePictureUrl": "https://cdn.example.com/grace.png",
    }
    payload.update(overrides)
    return payload


def persona_payload(vault_id: str, persona_id: str, name: str) -> dict[str, object]:
    return {
        "id": vault_id,
        "personaId": persona_id,
        "name": name,
        "createdAt": "2024-05-01T10:00:00Z",
        "updatedAt": "2024-05-02T11:30:00+00:00",
    }


def personas_payload() -> list[dict[str, object]]:
    # Orden deliberadamente no alfabético: el cliente no debe reordenar.
    return [
        persona_payload(VAULT_ID_BOB, "p-bob", "Bob"),
        persona_payload(VAULT_ID_ADA, "p-ada", "Ada"),
    ]


def prompt_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "success": True,
        "response": "Here is your summary.",
        "userId": USER_ID,
        "promptTokens": 12,
        "completionTokens": 30,
        "totalTokens": 42,
    }
    payload.update(overrides)
    return payload


class FakeServer:
    """Records every request and answers with a fixed handler."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last.content)


def json_response(status_code: int, payload: object) -> Handler:
    return lambda request: httpx.Response(status_code, json=payload)


def raw_response(status_code: int, content: bytes = b"") -> Handler:
    return lambda request: httpx.Response(status_code, content=content)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config files and DBLU_* env vars out of every test."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in list(os.environ):
        if key.upper().startswith("DBLU_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., tuple[DBLUClient, FakeServer]]:
    """Build a client wired to a `FakeServer` through `httpx.MockTransport`."""

    def _make(
        handler: Handler,
        *,
        base_url: str = BASE_URL,
        client_settings: AppSettings | None = None,
    ) -> tuple[DBLUClient, FakeServer]:
        server = FakeServer(handler)
        client = DBLUClient(
            base_url,
            settings=client_settings or settings,
            transport=httpx.MockTransport(server),
        )
        return client, server

    return _make


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
