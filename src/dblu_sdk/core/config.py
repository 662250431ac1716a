"""Configuración del SDK.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente HTTP y la demo leen la misma configuración de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCTION_BASE_URL = "https://api.dblu.ai"
LOCAL_BASE_URL = "http://127.0.0.1:8000"
SDK_USER_AGENT = "DBLUSDK/1.0.0"

_APP_DIR_NAME = "dblu-sdk"
_USER_ENV_HEADER = "# DBLU SDK user config (.env), written by `dblu-demo config setup`\n"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or Path.home())
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return root / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :]

    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def _format_env_value(value: str) -> str:
    # Sin comillas, python-dotenv trata ` #` como inicio de comentario.
    if any(ch.isspace() or ch == "#" for ch in value):
        return f'"{value}"'
    return value


def read_user_env_vars() -> dict[str, str]:
    """Lee el .env global del usuario (vacío si todavía no existe)."""

    env_path = get_user_env_file()
    if not env_path.is_file():
        return {}
    pairs = (_parse_env_line(line) for line in env_path.read_text(encoding="utf-8").splitlines())
    return dict(pair for pair in pairs if pair is not None)


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Fusiona `values` en el .env global del usuario y devuelve su ruta.

    Los valores `None` se ignoran (no borran lo que ya existe).
    """

    merged = read_user_env_vars()
    merged.update({key: value for key, value in values.items() if value is not None})

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={_format_env_value(merged[key])}\n" for key in sorted(merged))
    env_path.write_text(_USER_ENV_HEADER + body, encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del SDK y de la demo.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el cliente.
    - Los paths y la colocación del token son contrato del servidor: se
      pueden ajustar sin tocar código.

    `mcp_token` y `partner_key` solo los usa la CLI; el cliente siempre
    recibe las credenciales por parámetro.
    """

    model_config = SettingsConfigDict(
        env_prefix="DBLU_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=PRODUCTION_BASE_URL,
        min_length=1,
        description="Base URL de la API (se valida al construir cada request).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout del transporte httpx (segundos).",
    )
    user_agent: str = Field(
        default=SDK_USER_AGENT,
        min_length=1,
        description="User-Agent enviado en todas las peticiones.",
    )

    token_header: str = Field(
        default="Authorization",
        min_length=1,
        description="Header que transporta el MCP token.",
    )
    token_scheme: str = Field(
        default="Bearer",
        description="Prefijo del token dentro del header ('' = token crudo).",
    )

    health_path: str = Field(default="/health", min_length=1)
    auth_path: str = Field(default="/api/v1/mcp/auth/test", min_length=1)
    doubles_path: str = Field(default="/api/v1/mcp/doubles", min_length=1)
    prompt_path: str = Field(default="/api/v1/mcp/prompt", min_length=1)

    mcp_token: str | None = Field(
        default=None,
        description="MCP token por defecto para la demo CLI.",
    )
    partner_key: str | None = Field(
        default=None,
        description="Partner key por defecto para la demo CLI.",
    )


def load_settings(**overrides: Any) -> AppSettings:
    """Construye `AppSettings` leyendo los .env en el momento de la llamada.

    Precedencia: argumentos > variables de entorno > `.env` del proyecto (dev)
    > `.env` global de usuario. pydantic-settings deja que cada fichero pise
    al anterior, por eso el del usuario va primero.
    """

    env_files = (str(get_user_env_file()), ".env")
    return AppSettings(_env_file=env_files, **overrides)
