"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los payloads del backend se tratan como JSON opaco; aquí solo viven las
  estructuras que el cliente construye o expone.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import GENERIC_FAILURE_MESSAGE, ApiFailureKind

TOKEN_KEY = "token"
USERNAME_KEY = "Username"
USER_KEY = "user"

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]


class Credentials(BaseModel):
    """Sesión actual leída de la fuente de credenciales.

    Por qué dos campos para el usuario:
    - El backend recibe el nombre de cuenta desde dos claves distintas
      (`Username` y `user`) según la operación; se conservan ambas.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = Field(
        default=None,
        description="Bearer token opaco emitido por /login.",
    )
    username: str | None = Field(
        default=None,
        description="Nombre de cuenta guardado bajo la clave 'Username'.",
    )
    user: str | None = Field(
        default=None,
        description="Nombre de cuenta guardado bajo la clave 'user'.",
    )

    def bearer(self) -> str:
        # Sin token se envía el literal 'null', igual que el cliente web.
        # HTTP no admite espacios finales en un header: token "" -> "Bearer".
        value = "Bearer " + ("null" if self.token is None else self.token)
        return value.rstrip()


class ApiRequest(BaseModel):
    """Descriptor de una petición, construido por cada llamada."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any | None = Field(
        default=None,
        description="Cuerpo JSON; None = sin cuerpo. Un dict vacío sí se envía.",
    )


class ApiFailure(BaseModel):
    """Instantánea serializable de un `ApiError` (para UI, JSON, logs)."""

    kind: ApiFailureKind
    status_code: int | None = None
    detail: str | None = None
    message: str = GENERIC_FAILURE_MESSAGE
