"""Cliente de autenticación contra el API de autotrading.

Dos operaciones (`register_user`, `login_user`), cada una un único
`POST` con el payload serializado como JSON. Sin reintentos ni caché:
cualquier fallo se propaga como `TransportError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from adapters.http_client import build_async_client, decode_body
from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import ApiResponse, UserCredentials
from core.interfaces.auth_api import AuthAPI, Payload

logger = logging.getLogger(__name__)

SIGNUP_PATH = "signup"
LOGIN_PATH = "login"


def _serialize(payload: Payload) -> Any:
    if isinstance(payload, UserCredentials):
        return payload.to_payload()
    if isinstance(payload, Mapping):
        return dict(payload)
    return payload


def _to_api_response(response: httpx.Response) -> ApiResponse:
    return ApiResponse(
        status_code=response.status_code,
        body=decode_body(response),
        headers=dict(response.headers),
        url=str(response.url),
    )


class RequestClient(AuthAPI):
    """Cliente HTTP con URL base fija.

    Usage:
        async with RequestClient(base_url="https://api.example.com") as api:
            result = await api.register_user({"email": "a@b.com", "password": "x"})

    Un `httpx.AsyncClient` inyectado no se cierra en `aclose()`; el que se
    crea internamente sí.
    """

    def __init__(
        self,
        *,
        base_url: str,
        settings: AppSettings | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self._settings = settings
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = build_async_client(
                self._settings,
                base_url=self.base_url,
                transport=self._transport,
            )
        return self._client

    async def register_user(self, payload: Payload) -> ApiResponse:
        return await self._post(SIGNUP_PATH, payload)

    async def login_user(self, payload: Payload) -> ApiResponse:
        return await self._post(LOGIN_PATH, payload)

    async def _post(self, path: str, payload: Payload) -> ApiResponse:
        client = self._get_client()
        target = f"{self.base_url}/{path}"
        logger.debug("POST %s", target)

        try:
            response = await client.post(path, json=_serialize(payload))
        except httpx.HTTPError as exc:
            logger.debug("POST %s failed: %s", target, exc)
            raise TransportError(
                f"POST {target} failed: {exc}",
                url=target,
                cause=exc,
            ) from exc

        result = _to_api_response(response)
        logger.debug("POST %s -> HTTP %s", target, result.status_code)
        if not result.ok:
            raise TransportError(
                f"HTTP {result.status_code}",
                status_code=result.status_code,
                response=result,
                url=result.url or target,
            )
        return result

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


def build_request_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RequestClient:
    """Construye un `RequestClient` desde la configuración.

    Sin `settings` se lee el entorno; si falta `AUTOTRADING_API_URL` lanza
    `pydantic.ValidationError`.
    """

    settings = settings or AppSettings()
    return RequestClient(base_url=settings.api_url, settings=settings, transport=transport)
