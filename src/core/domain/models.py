"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da un contrato tipado para credenciales y respuestas sin acoplar el
  Core a httpx.

Nota:
- El cliente no valida ni transforma el contenido de las credenciales: el
  modelo solo documenta la forma habitual del payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class UserCredentials(BaseModel):
    """Credenciales enviadas a `signup` y `login`.

    Campos adicionales (p.ej. `nickname`) se conservan y se envían tal cual.
    """

    model_config = ConfigDict(extra="allow")

    email: str = Field(
        ...,
        min_length=1,
        description="Identificador del usuario (email o username).",
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Secreto del usuario; nunca se registra en logs.",
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ApiResponse(BaseModel):
    """Respuesta del API tal como la entrega el transporte."""

    status_code: int = Field(
        ...,
        description="Código HTTP de la respuesta (sin acotar: httpx acepta cualquier entero).",
    )
    body: Any = Field(
        default=None,
        description="Cuerpo decodificado (JSON si aplica, texto si no, None si vacío).",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers de la respuesta.",
    )
    url: str = Field(
        default="",
        description="URL final del request.",
    )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status_code, "body": self.body}
