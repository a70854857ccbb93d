"""CLI principal (Typer).

La CLI hace el papel del front-end: guarda la sesión en disco
(`JsonFileCredentialStore`) y delega cada comando en `MovieApiClient`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console
from rich.text import Text

from adapters.credential_store import JsonFileCredentialStore
from adapters.movie_api import MovieApiClient
from cli.doctor import app as doctor_app
from cli.ui_components import build_movies_table, build_payload_panel, print_banner
from core.config import AppSettings
from core.domain.errors import ApiError
from core.interfaces.credentials import CredentialSource
from core.logging_config import configure_logging, get_logger
from core.services.session import (
    forget_session,
    read_credentials,
    remember_login,
    remember_username,
)

app = typer.Typer(no_args_is_help=True, help="myFlix movie catalog client.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
logger = get_logger(__name__)


@dataclass
class CliState:
    settings: AppSettings
    store: CredentialSource
    json_output: bool = False


def build_credential_store(settings: AppSettings) -> CredentialSource:
    return JsonFileCredentialStore(settings.resolved_credentials_path())


def build_api_client(settings: AppSettings, store: CredentialSource) -> MovieApiClient:
    return MovieApiClient(store, settings)


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON payloads."),
) -> None:
    """Browse the myFlix catalog and manage your account."""

    settings = AppSettings()
    configure_logging(settings)
    ctx.obj = CliState(
        settings=settings,
        store=build_credential_store(settings),
        json_output=json_output,
    )


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _call(ctx: typer.Context, operation: Callable[[MovieApiClient], Awaitable[Any]]) -> Any:
    state = _state(ctx)
    client = build_api_client(state.settings, state.store)
    try:
        return asyncio.run(operation(client))
    except ApiError as exc:
        logger.debug("Command failed", failure=exc.to_failure().model_dump(mode="json"))
        _console.print(Text(str(exc), style="red"))
        raise typer.Exit(code=1) from exc


def _show(ctx: typer.Context, payload: Any, *, title: str) -> None:
    if _state(ctx).json_output:
        _console.print_json(data=payload)
    elif isinstance(payload, list):
        _console.print(build_movies_table(payload, title=title))
    else:
        _console.print(build_payload_panel(payload, title=title))


@app.command()
def register(
    ctx: typer.Context,
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
    email: str = typer.Option(..., "--email", "-e", prompt=True),
    birthday: str | None = typer.Option(None, "--birthday", help="YYYY-MM-DD"),
) -> None:
    """Create a new account."""

    details: dict[str, Any] = {"Username": username, "Password": password, "Email": email}
    if birthday:
        details["Birthday"] = birthday
    payload = _call(ctx, lambda client: client.register(details))
    _show(ctx, payload, title="Registered")


@app.command()
def login(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Log in and remember the session."""

    state = _state(ctx)
    payload = _call(ctx, lambda client: client.login({"Username": username, "Password": password}))
    try:
        credentials = remember_login(state.store, payload)
    except ValueError as exc:
        _console.print(Text(f"Login failed: {exc}", style="red"))
        raise typer.Exit(code=1) from exc
    if not state.json_output:
        print_banner(_console)
    _console.print(Text.assemble(("Logged in as", "green"), " ", credentials.user or ""))


@app.command()
def logout(ctx: typer.Context) -> None:
    """Forget the stored session."""

    forget_session(_state(ctx).store)
    _console.print("[green]Logged out.[/green]")


@app.command()
def movies(ctx: typer.Context) -> None:
    """List every movie."""

    _show(ctx, _call(ctx, lambda client: client.list_movies()), title="Movies")


@app.command()
def movie(ctx: typer.Context, title: str = typer.Argument(...)) -> None:
    """Show one movie by title."""

    _show(ctx, _call(ctx, lambda client: client.get_movie(title)), title=title)


@app.command()
def director(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    """Show a director."""

    _show(ctx, _call(ctx, lambda client: client.get_director(name)), title=name)


@app.command()
def genre(ctx: typer.Context, name: str = typer.Argument(...)) -> None:
    """Show a genre."""

    _show(ctx, _call(ctx, lambda client: client.get_genre(name)), title=name)


@app.command()
def profile(ctx: typer.Context) -> None:
    """Show the logged-in user."""

    _show(ctx, _call(ctx, lambda client: client.get_user()), title="Profile")


@app.command()
def favorites(ctx: typer.Context) -> None:
    """List the user's favorite movies."""

    _show(ctx, _call(ctx, lambda client: client.list_favorites()), title="Favorites")


@app.command(name="favorite-add")
def favorite_add(ctx: typer.Context, movie_id: str = typer.Argument(...)) -> None:
    """Add a movie (by id) to favorites."""

    _show(ctx, _call(ctx, lambda client: client.add_favorite(movie_id)), title="Profile")


@app.command(name="favorite-remove")
def favorite_remove(ctx: typer.Context, movie_id: str = typer.Argument(...)) -> None:
    """Remove a movie (by id) from favorites."""

    _show(ctx, _call(ctx, lambda client: client.remove_favorite(movie_id)), title="Profile")


@app.command(name="edit-profile")
def edit_profile(
    ctx: typer.Context,
    username: str | None = typer.Option(None, "--username", "-u"),
    password: str | None = typer.Option(None, "--password", "-p"),
    email: str | None = typer.Option(None, "--email", "-e"),
    birthday: str | None = typer.Option(None, "--birthday"),
) -> None:
    """Update account fields; only the given options are sent."""

    fields = {"Username": username, "Password": password, "Email": email, "Birthday": birthday}
    details = {k: v for k, v in fields.items() if v is not None}
    if not details:
        raise typer.BadParameter("nothing to update")

    state = _state(ctx)
    payload = _call(ctx, lambda client: client.edit_user(details))
    if details.get("Username"):
        # Las rutas siguientes se construyen con el nombre guardado.
        renamed = payload.get("Username") if isinstance(payload, dict) else None
        if not isinstance(renamed, str) or not renamed:
            renamed = details["Username"]
        remember_username(state.store, renamed)
    _show(ctx, payload, title="Profile")


@app.command(name="delete-account")
def delete_account(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete the logged-in account and forget the session."""

    state = _state(ctx)
    account = read_credentials(state.store).user
    if not yes and not typer.confirm(f"Delete account {account}?"):
        raise typer.Abort()

    payload = _call(ctx, lambda client: client.delete_user())
    forget_session(state.store)
    _show(ctx, payload, title="Deleted")


def run() -> None:
    app()
