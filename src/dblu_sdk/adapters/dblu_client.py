"""Cliente async para la API de DBLU.

Responsabilidad:
- Traducir las cuatro operaciones del SDK a requests HTTP contra `base_url`.
- Decodificar el JSON de respuesta a modelos del dominio.
- Mapear cada fallo a exactamente una variante de `DBLUError`.

Reglas:
- Sin reintentos, sin caché, sin estado mutable entre llamadas.
- Una request por llamada; cada llamada abre y cierra su `httpx.AsyncClient`.
- Solo `ping` se traga los errores (es una sonda booleana).
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from dblu_sdk.adapters.http_client import build_async_client
from dblu_sdk.core.config import AppSettings
from dblu_sdk.core.domain.errors import (
    DBLUError,
    DecodingError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    NetworkUnavailableError,
    NoDataError,
)
from dblu_sdk.core.domain.models import (
    AuthResult,
    ClientConfig,
    HealthCheck,
    PersonaRecord,
    PromptRequest,
    PromptResult,
)
from dblu_sdk.core.interfaces.api import PersonaAPI

T = TypeVar("T")

_AUTH_RESULT = TypeAdapter(AuthResult)
_PERSONA_LIST = TypeAdapter(list[PersonaRecord])
_PROMPT_RESULT = TypeAdapter(PromptResult)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def _detail_message(response: httpx.Response) -> str | None:
    """Extrae `{"detail": "..."}` (formato de error típico de FastAPI)."""

    try:
        payload = json.loads(response.content)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    return None


class DBLUClient(PersonaAPI):
    """Implementación httpx de `PersonaAPI`.

    `base_url` es inmutable y no se valida al construir: una URL inválida
    produce `InvalidURLError` en la primera llamada, no aquí.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._config = ClientConfig(
            base_url=base_url if base_url is not None else self._settings.base_url
        )
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def __repr__(self) -> str:
        return f"DBLUClient(base_url={self.base_url!r})"

    # ------------------------------------------------------------------ #
    # Operaciones
    # ------------------------------------------------------------------ #

    async def ping(self) -> bool:
        try:
            health = await self.check_health()
        except (DBLUError, httpx.HTTPError):
            return False
        return health.ok

    async def check_health(self) -> HealthCheck:
        """GET al endpoint de salud; devuelve status y cuerpo sin interpretar."""

        response = await self._send("GET", self._settings.health_path)
        return HealthCheck(status_code=response.status_code, body=response.text)

    async def authenticate(self, token: str) -> AuthResult:
        """Verifica un MCP token.

        Un 401 es un resultado normal (`is_authenticated=False`) siempre que
        el cuerpo se pueda decodificar.
        """

        response = await self._send("GET", self._settings.auth_path, token=token)
        if response.status_code == 401:
            return self._decode_rejected_auth(response)
        self._ensure_success(response)
        return self._decode(response, _AUTH_RESULT)

    async def list_personas(self, token: str) -> list[PersonaRecord]:
        """Lista los dobles del vault en el orden que devuelve el servidor."""

        response = await self._send("GET", self._settings.doubles_path, token=token)
        self._ensure_success(response)
        return self._decode(response, _PERSONA_LIST)

    async def execute_prompt(
        self,
        token: str,
        prompt: str,
        partner_key: str,
        persona_id: str | None = None,
    ) -> PromptResult:
        """Ejecuta un prompt, con un doble concreto o con todos como contexto.

        403 (partner key inválida) y 429 (límite de uso) llegan como
        `HTTPStatusError`; darles nombre es cosa de la presentación.
        """

        request = PromptRequest(prompt=prompt, partner_key=partner_key, persona_id=persona_id)
        response = await self._send(
            "POST",
            self._settings.prompt_path,
            token=token,
            payload=request.to_payload(),
        )
        self._ensure_success(response)
        return self._decode(response, _PROMPT_RESULT)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _endpoint(self, path: str) -> httpx.URL:
        raw = f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as exc:
            raise InvalidURLError(raw) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(raw)
        return url

    def _auth_headers(self, token: str) -> dict[str, str]:
        scheme = self._settings.token_scheme.strip()
        value = f"{scheme} {token}" if scheme else token
        return {self._settings.token_header: value}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = self._endpoint(path)
        headers = self._auth_headers(token) if token is not None else None
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                try:
                    request = client.build_request(method, url, headers=headers, json=payload)
                except UnicodeEncodeError as exc:
                    # Los headers HTTP solo admiten ASCII: la request no se puede construir.
                    raise InvalidURLError(str(url)) from exc
                return await client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise InvalidURLError(str(url)) from exc
        except (httpx.ProtocolError, httpx.DecodingError, httpx.TooManyRedirects) as exc:
            # Hubo respuesta, pero no es HTTP válido.
            raise InvalidResponseError() from exc
        except httpx.RequestError as exc:
            raise NetworkUnavailableError() from exc

    @staticmethod
    def _ensure_success(response: httpx.Response) -> None:
        if not _is_success(response.status_code):
            raise HTTPStatusError(response.status_code)

    @staticmethod
    def _decode(response: httpx.Response, adapter: TypeAdapter[T]) -> T:
        if not response.content.strip():
            raise NoDataError()
        try:
            return adapter.validate_json(response.content)
        except ValidationError as exc:
            raise DecodingError(exc) from exc

    def _decode_rejected_auth(self, response: httpx.Response) -> AuthResult:
        if not response.content.strip():
            raise NoDataError()
        try:
            result = _AUTH_RESULT.validate_json(response.content)
        except ValidationError as exc:
            detail = _detail_message(response)
            if detail is None:
                raise DecodingError(exc) from exc
            return AuthResult(is_authenticated=False, error=detail)
        # Un 401 nunca autentica, diga lo que diga el cuerpo.
        return result.model_copy(update={"is_authenticated": False})
