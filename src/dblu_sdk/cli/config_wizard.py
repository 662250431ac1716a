"""`config` sub-commands: store and inspect the demo configuration."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from dblu_sdk.cli.ui_components import mask_token
from dblu_sdk.core.config import (
    PRODUCTION_BASE_URL,
    get_user_env_file,
    load_settings,
    read_user_env_vars,
    write_user_env_vars,
)

app = typer.Typer(no_args_is_help=True, help="Store and inspect the demo configuration.")

_console = Console()


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env).

    Blank answers for the token or partner key keep whatever is already stored.
    """

    current = load_settings()
    base_url = typer.prompt(
        "API base URL",
        default=current.base_url or PRODUCTION_BASE_URL,
        show_default=True,
    ).strip()
    token = typer.prompt("MCP token", default="", hide_input=True, show_default=False).strip()
    partner_key = typer.prompt("Partner key", default="", hide_input=True, show_default=False).strip()

    if not base_url:
        raise typer.BadParameter("base URL is required")

    env_path = write_user_env_vars(
        {
            "DBLU_BASE_URL": base_url,
            "DBLU_MCP_TOKEN": token or None,
            "DBLU_PARTNER_KEY": partner_key or None,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")


@app.command()
def show() -> None:
    """Show the effective configuration (secrets truncated)."""

    settings = load_settings()

    table = Table(title="DBLU SDK config")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("base_url", settings.base_url)
    table.add_row("user_agent", settings.user_agent)
    table.add_row("http_timeout_seconds", str(settings.http_timeout_seconds))
    table.add_row("token_header", settings.token_header)
    table.add_row("token_scheme", settings.token_scheme or "(raw token)")
    table.add_row("mcp_token", mask_token(settings.mcp_token, 6) if settings.mcp_token else "(not set)")
    table.add_row("partner_key", mask_token(settings.partner_key, 4) if settings.partner_key else "(not set)")
    stored = read_user_env_vars()
    table.add_row("user .env", f"{get_user_env_file()} ({len(stored)} stored)")

    _console.print(table)
