"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from adapters.credential_store import JsonFileCredentialStore
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.services.session import read_credentials

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc) or exc.__class__.__name__


def _settings(ctx: typer.Context) -> AppSettings:
    state = ctx.obj
    return state.settings if state is not None else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Show the active configuration and check the backend is reachable."""

    settings = _settings(ctx)
    session_path = settings.resolved_credentials_path()
    credentials = read_credentials(JsonFileCredentialStore(session_path))

    table = Table(title="myFlix Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", Text(settings.api_base_url))
    timeout = settings.http_timeout_seconds
    table.add_row("HTTP timeout", "OK", "none" if timeout is None else f"{timeout:g}s")
    table.add_row(
        "Path encoding",
        "OK",
        "percent-encoded segments" if settings.encode_path_segments else "verbatim segments",
    )

    if credentials.token:
        table.add_row("Session", "OK", Text(f"{credentials.user} ({session_path})"))
    else:
        table.add_row("Session", "OPTIONAL", Text(f"Not logged in ({session_path})"))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.api_base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", Text(detail_http))

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] set MYFLIX_API_BASE_URL or run `myflix doctor setup`."
        )
        raise typer.Exit(code=1)


@app.command()
def setup(
    base_url: str = typer.Option(..., "--base-url", prompt="API base URL"),
) -> None:
    """Store the API base URL in the user config .env."""

    base_url = base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"MYFLIX_API_BASE_URL": base_url})
    _console.print(Text.assemble(("Saved API config to:", "green"), " ", str(env_path)))
