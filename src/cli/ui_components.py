"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import ApiResponse


def _format_body(body: object) -> str:
    if body is None:
        return "(empty)"
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False, indent=2, sort_keys=True)


def build_response_panel(title: str, response: ApiResponse) -> Panel:
    """Panel para una respuesta 2xx."""

    body = Text()
    body.append(f"HTTP {response.status_code}\n", style="bold green")
    if response.url:
        body.append(f"{response.url}\n\n", style="dim")
    body.append(_format_body(response.body))
    return Panel(body, title=Text(title, style="bold cyan"), border_style="green")


def build_error_panel(title: str, error: TransportError) -> Panel:
    """Panel para un `TransportError` (HTTP no-2xx o fallo de red)."""

    body = Text()
    if error.status_code is not None:
        body.append(f"HTTP {error.status_code}\n", style="bold red")
    else:
        body.append("Network error\n", style="bold red")
    if error.url:
        body.append(f"{error.url}\n\n", style="dim")
    if error.response is not None:
        body.append(_format_body(error.response.body))
    elif error.cause is not None:
        body.append(f"{type(error.cause).__name__}: {error.cause}")
    else:
        body.append(str(error))
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_settings_table(settings: AppSettings) -> Table:
    table = Table(title="Effective configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("api_url", settings.api_url)
    timeout = settings.http_timeout_seconds
    table.add_row("http_timeout_seconds", "transport default" if timeout is None else f"{timeout:g}")
    table.add_row("user_agent", settings.user_agent)
    table.add_row("log_level", settings.log_level)
    return table
