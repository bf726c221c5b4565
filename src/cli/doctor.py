"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    # Any HTTP status counts as reachable; only transport failures are reported.
    try:
        async with build_async_client(settings) as client:
            response = await client.get("")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table = Table(title="autotrading Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        settings = AppSettings()
    except ValidationError as exc:
        table.add_row("API URL", "FAIL", "; ".join(err["msg"] for err in exc.errors()))
        table.add_row("User config", "INFO", str(get_user_env_file()))
        _console.print(table)
        _console.print(
            "\n[yellow]Fix:[/yellow] run `autotrading-auth config set-api-url <url>` "
            "or export AUTOTRADING_API_URL."
        )
        raise typer.Exit(code=2)

    table.add_row("API URL", "OK", settings.api_url)
    timeout = settings.http_timeout_seconds
    table.add_row("Timeout", "OK", "transport default" if timeout is None else f"{timeout:g}s")

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)
