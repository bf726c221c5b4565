"""Errores del dominio.

Un único tipo, `TransportError`, cubre fallos de red, timeouts y respuestas
no-2xx. El llamador distingue los casos mirando `status_code`.
"""

from __future__ import annotations

from core.domain.models import ApiResponse


class TransportError(Exception):
    """Fallo de un request saliente."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response: ApiResponse | None = None,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.url = url
        self.cause = cause

    @property
    def body(self) -> object:
        return self.response.body if self.response is not None else None

    def __repr__(self) -> str:
        return f"TransportError({str(self)!r}, status_code={self.status_code!r}, url={self.url!r})"
