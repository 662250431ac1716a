"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta del JSON del servidor sin escribir decodificadores a mano.
- `frozen=True`: una vez decodificada, una entidad no cambia.

Nota:
- El servidor puede responder en camelCase o snake_case; los alias aceptan ambos.
- Los opcionales son `None` cuando el campo no viene (nunca 0 ni "").
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

_WIRE_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    populate_by_name=True,
    alias_generator=to_camel,
)


class ClientConfig(BaseModel):
    """Configuración inmutable de una instancia de cliente.

    La URL no se valida aquí: un `base_url` inválido se detecta al construir
    cada request (`InvalidURLError`).
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="Base URL absoluta HTTP(S) de la API.")


class UserInfo(BaseModel):
    model_config = _WIRE_CONFIG

    id: UUID = Field(..., description="Identificador único del usuario.")
    first_name: str
    last_name: str
    email: str
    email_verified: bool
    searchable: bool
    profile_picture_url: str | None = None


class AuthResult(BaseModel):
    """Resultado del test de autenticación con MCP token.

    Un token rechazado (401 con cuerpo decodificable) también produce un
    `AuthResult`, con `is_authenticated=False` y `error` poblado.
    """

    model_config = _WIRE_CONFIG

    is_authenticated: bool
    user_info: UserInfo | None = None
    error: str | None = None


class PersonaRecord(BaseModel):
    """Un "doble": persona guardada en el vault del usuario.

    `persona_id` es el identificador estable que se pasa a `execute_prompt`;
    `id` es el identificador del registro en el vault y no son intercambiables.
    """

    model_config = _WIRE_CONFIG

    id: UUID = Field(..., description="Identificador del registro en el vault.")
    persona_id: str
    name: str
    created_at: datetime
    updated_at: datetime


class PromptRequest(BaseModel):
    """Cuerpo del POST de ejecución de prompt.

    Sin `persona_id` el servidor usa todas las personas como contexto; es un
    modo propio, no un valor por defecto.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str
    partner_key: str
    persona_id: str | None = None

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(mode="json", exclude_none=True)


class PromptResult(BaseModel):
    model_config = _WIRE_CONFIG

    success: bool
    response: str | None = None
    error: str | None = None
    user_id: str | None = None
    prompt_tokens: int | None = Field(default=None, ge=0)
    completion_tokens: int | None = Field(default=None, ge=0)
    total_tokens: int | None = Field(default=None, ge=0)


class HealthCheck(BaseModel):
    """Respuesta cruda del endpoint de salud (para mostrarla tal cual)."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299
