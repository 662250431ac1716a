"""Typer entry-point for the DBLU demo.

Each command calls a single SDK operation (the prompt command may list the
vault first) and renders either the typed result or a per-variant error.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from dblu_sdk.adapters.dblu_client import DBLUClient
from dblu_sdk.cli.config_wizard import app as config_app
from dblu_sdk.cli.ui_components import (
    build_auth_panel,
    build_error_panel,
    build_health_panel,
    build_personas_table,
    build_prompt_panel,
    describe_error,
    mask_token,
    print_banner,
)
from dblu_sdk.core.config import LOCAL_BASE_URL, AppSettings, load_settings
from dblu_sdk.core.domain.errors import DBLUError
from dblu_sdk.core.interfaces.api import PersonaAPI
from dblu_sdk.core.services.persona_selection import describe_context, select_persona

app = typer.Typer(no_args_is_help=True, help="DBLU SDK demo: health, MCP auth, doubles and prompts.")
app.add_typer(config_app, name="config")

_console = Console()
logger = logging.getLogger(__name__)


@dataclass
class DemoState:
    settings: AppSettings
    client: PersonaAPI


def configure_logging(*, verbose: bool = False) -> None:
    """Route stdlib logging through Rich on stderr.

    Verbose mode surfaces the request lines httpx logs at INFO.
    """

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("dblu_sdk").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


def build_client(base_url: str, settings: AppSettings) -> PersonaAPI:
    return DBLUClient(base_url, settings=settings)


def _state(ctx: typer.Context) -> DemoState:
    state = ctx.find_root().obj
    if not isinstance(state, DemoState):
        raise typer.BadParameter("CLI state not initialised")
    return state


def _resolve_secret(value: str | None, fallback: str | None, label: str) -> str:
    resolved = (value or fallback or "").strip()
    if not resolved:
        resolved = typer.prompt(label, hide_input=True).strip()
    if not resolved:
        raise typer.BadParameter(f"{label} is required")
    return resolved


def _fail(title: str, error: DBLUError, *, base_url: str, token: str | None = None) -> NoReturn:
    logger.debug("%s: %r", title, error)
    _console.print(build_error_panel(title, describe_error(error), base_url=base_url, token=token))
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL (overrides DBLU_BASE_URL)."),
    local: bool = typer.Option(False, "--local", help=f"Use the local dev server ({LOCAL_BASE_URL})."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs and HTTP request lines."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    configure_logging(verbose=verbose)
    settings = load_settings()

    url = base_url or (LOCAL_BASE_URL if local else settings.base_url)
    logger.debug("Using base URL %s", url)
    ctx.obj = DemoState(settings=settings, client=build_client(url, settings))

    if not no_banner:
        print_banner(_console)


@app.command()
def health(ctx: typer.Context) -> None:
    """Call the health endpoint and show the raw response."""

    state = _state(ctx)
    try:
        result = asyncio.run(state.client.check_health())
    except DBLUError as exc:
        _fail("Network Error", exc, base_url=state.client.base_url)

    _console.print(build_health_panel(result, base_url=state.client.base_url))
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def auth(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help="MCP token (default: DBLU_MCP_TOKEN)."),
) -> None:
    """Test MCP token authentication."""

    state = _state(ctx)
    token = _resolve_secret(token, state.settings.mcp_token, "MCP token")
    try:
        result = asyncio.run(state.client.authenticate(token))
    except DBLUError as exc:
        _fail("Network Error", exc, base_url=state.client.base_url, token=token)

    _console.print(build_auth_panel(result, token=token, base_url=state.client.base_url))
    if not result.is_authenticated:
        raise typer.Exit(code=1)


@app.command()
def doubles(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-t", help="MCP token (default: DBLU_MCP_TOKEN)."),
) -> None:
    """List every double in the vault."""

    state = _state(ctx)
    token = _resolve_secret(token, state.settings.mcp_token, "MCP token")
    try:
        personas = asyncio.run(state.client.list_personas(token))
    except DBLUError as exc:
        _fail("Error Loading Doubles", exc, base_url=state.client.base_url, token=token)

    if not personas:
        _console.print("Found 0 doubles in your vault.")
    else:
        _console.print(build_personas_table(personas))
    _console.print(f"Token: {mask_token(token)}", style="dim", markup=False, highlight=False)


@app.command()
def prompt(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Prompt to execute."),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="MCP token (default: DBLU_MCP_TOKEN)."),
    partner_key: Optional[str] = typer.Option(
        None, "--partner-key", "-k", help="Partner key (default: DBLU_PARTNER_KEY)."
    ),
    double: Optional[str] = typer.Option(
        None, "--double", "-d", help="Persona ID or name. Omit to use all doubles as context."
    ),
) -> None:
    """Execute a prompt, optionally scoped to a single double."""

    state = _state(ctx)
    if not text.strip():
        raise typer.BadParameter("prompt must not be empty")
    token = _resolve_secret(token, state.settings.mcp_token, "MCP token")
    partner_key = _resolve_secret(partner_key, state.settings.partner_key, "Partner key")

    async def _run():
        persona = None
        if double:
            personas = await state.client.list_personas(token)
            persona = select_persona(personas, double)
        result = await state.client.execute_prompt(
            token,
            text,
            partner_key,
            persona.persona_id if persona else None,
        )
        return persona, result

    try:
        persona, result = asyncio.run(_run())
    except LookupError as exc:
        _console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1)
    except DBLUError as exc:
        _fail("Error Executing Prompt", exc, base_url=state.client.base_url, token=token)

    _console.print(build_prompt_panel(result, prompt=text, context=describe_context(persona)))
    if not result.success:
        raise typer.Exit(code=1)


def run() -> None:
    app()
