"""Errores del cliente de la API.

Reglas:
- Todo fallo (red o HTTP) llega al llamador como un único `ApiError`.
- `str(error)` es siempre el mensaje genérico; el detalle (tipo, status,
  cuerpo) queda disponible en atributos para quien quiera mostrar más.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.models import ApiFailure

GENERIC_FAILURE_MESSAGE = "Something bad happened; please try again later."


class ApiFailureKind(str, Enum):
    """Origen del fallo."""

    TRANSPORT = "transport"
    SERVER = "server"


class ApiError(Exception):
    def __init__(
        self,
        kind: ApiFailureKind,
        *,
        status_code: int | None = None,
        detail: str | None = None,
        message: str = GENERIC_FAILURE_MESSAGE,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ApiError(kind={self.kind.value!r}, status_code={self.status_code!r}, "
            f"detail={self.detail!r})"
        )

    def to_failure(self) -> "ApiFailure":
        from core.domain.models import ApiFailure

        return ApiFailure(
            kind=self.kind,
            status_code=self.status_code,
            detail=self.detail,
            message=self.message,
        )
