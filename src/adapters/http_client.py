"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y decodificación de cuerpos para todas las
  llamadas al backend.
- Facilita testeo: se puede inyectar un transporte (`httpx.MockTransport`).
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la app.

    Por qué un builder:
    - Centraliza timeout/User-Agent para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red en tests sin parchear httpx.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def decode_body(response: httpx.Response) -> Any:
    """Decodifica el cuerpo de una respuesta.

    - Cuerpo vacío -> None.
    - JSON válido -> valor JSON.
    - Otro texto (p.ej. "Alice was deleted.") -> str tal cual.
    """

    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text
