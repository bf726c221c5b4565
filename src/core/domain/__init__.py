"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo credenciales, respuestas y errores.
"""

from core.domain.errors import TransportError
from core.domain.models import ApiResponse, UserCredentials

__all__ = [
    "ApiResponse",
    "TransportError",
    "UserCredentials",
]
