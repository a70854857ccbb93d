"""Gestión de la sesión sobre un `CredentialSource`.

Por qué un servicio aparte:
- El cliente de la API solo lee credenciales; quien conduce el login (aquí
  la CLI) es quien las escribe, y lo hace siempre con estos helpers.
- Las dos claves de nombre (`user` y `Username`) se escriben juntas, así
  ninguna ruta de la API queda apuntando a una cuenta vieja.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import TOKEN_KEY, USER_KEY, USERNAME_KEY, Credentials
from core.interfaces.credentials import CredentialSource


def read_credentials(store: CredentialSource) -> Credentials:
    """Foto de la sesión actual, leída del store en cada llamada."""

    return Credentials(
        token=store.get(TOKEN_KEY),
        username=store.get(USERNAME_KEY),
        user=store.get(USER_KEY),
    )


def remember_username(store: CredentialSource, username: str) -> Credentials:
    """Guarda el nombre de cuenta en `user` y `Username`.

    Por qué: tras renombrar la cuenta, las rutas de favoritos usan `Username`
    y las de perfil usan `user`; si solo se actualiza una, la otra falla.
    """

    if not username:
        raise ValueError("username must not be empty")
    store.set(USER_KEY, username)
    store.set(USERNAME_KEY, username)
    return read_credentials(store)


def remember_login(store: CredentialSource, payload: Any) -> Credentials:
    """Persiste token y nombre de cuenta de una respuesta de `/login`.

    Forma esperada: ``{"user": {"Username": ...}, "token": ...}``.
    """

    if not isinstance(payload, dict):
        raise ValueError("login response is not a JSON object")

    token = payload.get("token")
    user = payload.get("user")
    username = user.get("Username") if isinstance(user, dict) else None
    if not isinstance(token, str) or not token:
        raise ValueError("login response carries no token")
    if not isinstance(username, str) or not username:
        raise ValueError("login response carries no username")

    store.set(TOKEN_KEY, token)
    return remember_username(store, username)


def forget_session(store: CredentialSource) -> None:
    for key in (TOKEN_KEY, USER_KEY, USERNAME_KEY):
        store.delete(key)
