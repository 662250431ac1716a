"""Componentes de UI para la demo CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Los mensajes por variante de error viven en un solo sitio.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dblu_sdk.core.domain.errors import (
    DBLUError,
    DecodingError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    NetworkUnavailableError,
    NoDataError,
)
from dblu_sdk.core.domain.models import AuthResult, HealthCheck, PersonaRecord, PromptResult

_HTTP_STATUS_LABELS: dict[int, str] = {
    401: "Authentication failed (invalid MCP token)",
    403: "Invalid partner key",
    429: "Usage limit exceeded",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("DBLU SDK Demo", style="bold cyan")
    subtitle = Text("MCP auth • Doubles • Prompts", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def mask_token(token: str, visible: int = 20) -> str:
    return f"{token[:visible]}..."


def format_timestamp(value: datetime) -> str:
    return value.strftime("%b %d, %Y %H:%M")


def describe_error(error: DBLUError) -> str:
    """Mensaje accionable y distinto por cada variante de error."""

    if isinstance(error, InvalidURLError):
        return f"Invalid URL: {error.url}"
    if isinstance(error, InvalidResponseError):
        return "Invalid response received"
    if isinstance(error, HTTPStatusError):
        label = _HTTP_STATUS_LABELS.get(error.status_code)
        if label:
            return f"HTTP {error.status_code} - {label}"
        return f"HTTP Error: {error.status_code}"
    if isinstance(error, DecodingError):
        return f"Decoding Error: {error.cause}"
    if isinstance(error, NoDataError):
        return "No data received"
    if isinstance(error, NetworkUnavailableError):
        return "Network unavailable"
    return str(error)


def _footer(body: Text, *, base_url: str, token: str | None = None) -> None:
    body.append("\n")
    if token is not None:
        body.append(f"\nToken: {mask_token(token)}", style="dim")
    body.append(f"\nTimestamp: {format_timestamp(datetime.now())}", style="dim")
    body.append(f"\nBase URL: {base_url}", style="dim")


def build_error_panel(
    title: str,
    details: str,
    *,
    base_url: str,
    token: str | None = None,
) -> Panel:
    body = Text()
    body.append(f"Error: {details}")
    _footer(body, base_url=base_url, token=token)
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_health_panel(health: HealthCheck, *, base_url: str) -> Panel:
    """Panel del health check (status + cuerpo crudo)."""

    ok = health.ok
    title = "API Health Check Successful" if ok else "API Health Check Failed"
    body = Text()
    body.append(f"Status Code: {health.status_code}\n")
    body.append(f"Response: {health.body or 'No response data'}")
    _footer(body, base_url=base_url)
    style = "green" if ok else "red"
    return Panel(body, title=Text(title, style=f"bold {style}"), border_style=style)


def build_auth_panel(result: AuthResult, *, token: str, base_url: str) -> Panel:
    body = Text()
    if not result.is_authenticated:
        body.append(f"Error: {result.error or 'Unknown error'}")
        _footer(body, base_url=base_url, token=token)
        return Panel(
            body,
            title=Text("MCP Token Authentication Failed", style="bold red"),
            border_style="red",
        )

    info = result.user_info
    if info is not None:
        body.append("User Information:\n", style="bold")
        body.append(f"• ID: {info.id}\n")
        body.append(f"• Name: {info.first_name} {info.last_name}\n")
        body.append(f"• Email: {info.email}\n")
        body.append(f"• Email Verified: {'Yes' if info.email_verified else 'No'}\n")
        body.append(f"• Searchable: {'Yes' if info.searchable else 'No'}")
        if info.profile_picture_url:
            body.append(f"\n• Profile Picture: {info.profile_picture_url}")
    else:
        body.append("Authenticated (no user information returned)")
    _footer(body, base_url=base_url, token=token)
    return Panel(
        body,
        title=Text("MCP Token Authentication Successful", style="bold green"),
        border_style="green",
    )


def build_personas_table(personas: Sequence[PersonaRecord]) -> Table:
    """Tabla de dobles en el orden del servidor (no se reordena)."""

    count = len(personas)
    table = Table(title=f"Found {count} double{'' if count == 1 else 's'} in your vault")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Persona ID", style="white")
    table.add_column("Vault ID", style="magenta")
    table.add_column("Created", style="green")
    table.add_column("Updated", style="green")
    for index, persona in enumerate(personas, start=1):
        table.add_row(
            str(index),
            persona.name,
            persona.persona_id,
            str(persona.id),
            format_timestamp(persona.created_at),
            format_timestamp(persona.updated_at),
        )
    return table


def build_prompt_panel(result: PromptResult, *, prompt: str, context: str) -> Panel:
    body = Text()
    body.append(f"Prompt: {prompt}\n")
    body.append(f"Context: {context}\n\n")
    if not result.success:
        body.append(f"Error: {result.error or 'Unknown error'}\n")
        body.append(f"User ID: {result.user_id or 'Unknown'}")
        return Panel(body, title=Text("Prompt Execution Failed", style="bold red"), border_style="red")

    body.append(result.response or "No response received")
    if result.total_tokens is not None:
        body.append("\n\nToken Usage:", style="bold")
        if result.prompt_tokens is not None:
            body.append(f"\n  Prompt: {result.prompt_tokens} tokens")
        if result.completion_tokens is not None:
            body.append(f"\n  Completion: {result.completion_tokens} tokens")
        body.append(f"\n  Total: {result.total_tokens} tokens")
    body.append(f"\n\nUser ID: {result.user_id or 'Unknown'}", style="dim")
    return Panel(body, title=Text("Prompt Executed Successfully", style="bold green"), border_style="green")
