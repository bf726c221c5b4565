"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts y headers para todos los requests.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import AppSettings

DEFAULT_USER_AGENT: str = AppSettings.model_fields["user_agent"].default


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` ligado a una URL base.

    - Si se pasa `base_url` sin `settings`, no se lee el entorno.
    - Sin timeout configurado se usa el default de httpx.
    """

    if settings is None and base_url is None:
        settings = AppSettings()

    user_agent = settings.user_agent if settings is not None else DEFAULT_USER_AGENT
    headers: dict[str, str] = {
        "User-Agent": user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)

    kwargs: dict[str, Any] = {
        "base_url": base_url if base_url is not None else settings.api_url,  # type: ignore[union-attr]
        "headers": headers,
    }
    if settings is not None and settings.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout_seconds)
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


def decode_body(response: httpx.Response) -> Any:
    """Decodifica el cuerpo: JSON si aplica, texto si no, None si vacío."""

    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text
