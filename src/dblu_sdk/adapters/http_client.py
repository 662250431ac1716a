"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers (Accept JSON, User-Agent del SDK).
- Facilita testeo: se inyecta un `httpx.MockTransport` sin tocar el cliente.
"""

from __future__ import annotations

import httpx

from dblu_sdk.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del SDK.

    Sin reintentos ni pool compartido: quien llama abre y cierra un cliente
    por operación (`async with`).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
