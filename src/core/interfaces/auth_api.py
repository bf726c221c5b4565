"""Contrato del cliente de autenticación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el cliente HTTP real por un doble en tests o en otras
  capas sin acoplarlas a httpx.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Union, runtime_checkable

from core.domain.models import ApiResponse, UserCredentials

Payload = Union[UserCredentials, Mapping[str, Any]]


@runtime_checkable
class AuthAPI(Protocol):
    """Contrato mínimo: dos operaciones remotas sobre un transporte compartido.

    Reglas de diseño:
    - Ambas operaciones son asíncronas porque hacen I/O (HTTP).
    - Un request por llamada; los errores se propagan como `TransportError`.
    """

    async def register_user(self, payload: Payload) -> ApiResponse:
        """Registra un usuario (`POST signup`)."""

        ...

    async def login_user(self, payload: Payload) -> ApiResponse:
        """Inicia sesión (`POST login`)."""

        ...
