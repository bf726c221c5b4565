"""CLI principal (Typer).

Comandos:
- `signup` / `login`: envían credenciales al API configurado.
- `config`: guarda o muestra la configuración del usuario.
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.request_client import build_request_client
from cli import doctor
from cli.ui_components import build_error_panel, build_response_panel, build_settings_table
from core.config import ENV_PREFIX, AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import TransportError
from core.domain.models import ApiResponse, UserCredentials

app = typer.Typer(no_args_is_help=True, help="Sign up and log in against the autotrading API.")
config_app = typer.Typer(no_args_is_help=True, help="Manage the per-user configuration.")
app.add_typer(config_app, name="config")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Instala un `RichHandler` en el logger raíz (idempotente)."""

    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=_err_console, show_path=False, rich_tracebacks=True))
    root.setLevel(level)


def _load_settings(ctx: typer.Context) -> AppSettings:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        details = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        _err_console.print(f"[red]Invalid configuration:[/red] {details}")
        _err_console.print(
            f"Set {ENV_PREFIX}API_URL or run `autotrading-auth config set-api-url <url>`."
        )
        raise typer.Exit(code=2)

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def parse_fields(fields: list[str] | None) -> dict[str, str]:
    """Convierte `--field key=value` en un dict."""

    extra: dict[str, str] = {}
    for item in fields or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--field")
        extra[key] = value
    return extra


def _submit(
    ctx: typer.Context,
    operation: str,
    email: str,
    password: str | None,
    fields: list[str] | None,
    as_json: bool,
) -> None:
    settings = _load_settings(ctx)
    if password is None:
        password = typer.prompt("Password", hide_input=True)
    credentials = _credentials(email, password, fields)

    async def _call() -> ApiResponse:
        async with build_request_client(settings) as api:
            if operation == "signup":
                return await api.register_user(credentials)
            return await api.login_user(credentials)

    try:
        result = asyncio.run(_call())
    except TransportError as exc:
        logger.debug("%s failed: %r", operation, exc)
        if as_json:
            typer.echo(
                json.dumps(
                    {"error": str(exc), "status": exc.status_code, "body": exc.body},
                    ensure_ascii=False,
                    sort_keys=True,
                )
            )
        else:
            _err_console.print(build_error_panel(f"{operation} failed", exc))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.as_dict(), ensure_ascii=False, sort_keys=True))
    else:
        _console.print(build_response_panel(operation, result))


def _credentials(email: str, password: str, fields: list[str] | None) -> UserCredentials:
    data: dict[str, object] = dict(parse_fields(fields))
    data.update({"email": email, "password": password})
    try:
        return UserCredentials.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        raise typer.BadParameter(err["msg"], param_hint=f"--{err['loc'][0]}")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    ctx.obj = {"verbose": verbose}


@app.command()
def signup(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", help="User identifier."),
    password: str | None = typer.Option(
        None, "--password", "-p", help="User secret (prompted, hidden, when omitted)."
    ),
    field: list[str] = typer.Option(None, "--field", "-f", help="Extra payload field (key=value)."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a panel."),
) -> None:
    """Register a new user (POST signup)."""

    _submit(ctx, "signup", email, password, field, as_json)


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", help="User identifier."),
    password: str | None = typer.Option(
        None, "--password", "-p", help="User secret (prompted, hidden, when omitted)."
    ),
    field: list[str] = typer.Option(None, "--field", "-f", help="Extra payload field (key=value)."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a panel."),
) -> None:
    """Log in an existing user (POST login)."""

    _submit(ctx, "login", email, password, field, as_json)


@config_app.command("set-api-url")
def set_api_url(url: str = typer.Argument(..., help="API base URL, e.g. https://api.example.com")) -> None:
    """Store the API base URL in the user config .env."""

    try:
        settings = AppSettings(api_url=url)
    except ValidationError as exc:
        raise typer.BadParameter(exc.errors()[0]["msg"], param_hint="URL")

    env_path = write_user_env_vars({f"{ENV_PREFIX}API_URL": settings.api_url})
    _console.print(f"[green]Saved API URL to:[/green] {env_path}")


@config_app.command("show")
def show(ctx: typer.Context) -> None:
    """Print the effective configuration."""

    settings = _load_settings(ctx)
    _console.print(build_settings_table(settings))
    _console.print(f"[dim]User config: {get_user_env_file()}[/dim]")


def run() -> None:
    app()
