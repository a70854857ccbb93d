"""Contrato de la fuente de credenciales.

Por qué Protocol:
- El cliente de la API recibe la fuente por inyección en vez de leer un
  almacenamiento global; cualquier objeto con `get/set/delete` sirve.
- Permite usar un store en memoria en tests y uno en disco en la CLI.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialSource(Protocol):
    """Almacén clave/valor síncrono de la sesión actual.

    Claves usadas: `token`, `Username`, `user`.
    """

    def get(self, key: str) -> str | None:
        """Devuelve el valor guardado o None si no existe."""

        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...
