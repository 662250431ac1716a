"""Contrato del cliente de la API de DBLU.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La demo CLI depende de este contrato, no de `DBLUClient`; se puede
  sustituir por un fake en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dblu_sdk.core.domain.models import AuthResult, HealthCheck, PersonaRecord, PromptResult


@runtime_checkable
class PersonaAPI(Protocol):
    """Las operaciones que expone el SDK.

    Reglas de diseño:
    - Todo es asíncrono: una request por llamada, sin colas ni reintentos.
    - Los fallos se propagan como `DBLUError`, salvo `ping`.
    """

    @property
    def base_url(self) -> str: ...

    async def ping(self) -> bool:
        """Sonda de alcanzabilidad: nunca lanza."""

        ...

    async def check_health(self) -> HealthCheck: ...

    async def authenticate(self, token: str) -> AuthResult: ...

    async def list_personas(self, token: str) -> list[PersonaRecord]: ...

    async def execute_prompt(
        self,
        token: str,
        prompt: str,
        partner_key: str,
        persona_id: str | None = None,
    ) -> PromptResult: ...
