"""DBLU SDK: cliente async para la API de DBLU.

Uso mínimo:

    client = DBLUClient()
    result = await client.authenticate(token)
"""

from dblu_sdk.adapters.dblu_client import DBLUClient
from dblu_sdk.core.config import AppSettings, load_settings
from dblu_sdk.core.domain import (
    AuthResult,
    DBLUError,
    DecodingError,
    ErrorKind,
    HealthCheck,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    NetworkUnavailableError,
    NoDataError,
    PersonaRecord,
    PromptResult,
    UserInfo,
)
from dblu_sdk.core.interfaces import PersonaAPI

__version__ = "1.0.0"

__all__ = [
    "AppSettings",
    "AuthResult",
    "DBLUClient",
    "DBLUError",
    "DecodingError",
    "ErrorKind",
    "HTTPStatusError",
    "HealthCheck",
    "InvalidResponseError",
    "InvalidURLError",
    "NetworkUnavailableError",
    "NoDataError",
    "PersonaAPI",
    "PersonaRecord",
    "PromptResult",
    "UserInfo",
    "load_settings",
]
