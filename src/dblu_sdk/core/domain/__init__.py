"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""

from dblu_sdk.core.domain.errors import (
    DBLUError,
    DecodingError,
    ErrorKind,
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
    UserInfo,
)

__all__ = [
    "AuthResult",
    "ClientConfig",
    "DBLUError",
    "DecodingError",
    "ErrorKind",
    "HTTPStatusError",
    "HealthCheck",
    "InvalidResponseError",
    "InvalidURLError",
    "NetworkUnavailableError",
    "NoDataError",
    "PersonaRecord",
    "PromptRequest",
    "PromptResult",
    "UserInfo",
]
