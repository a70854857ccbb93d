"""Cliente de la API REST de myFlix.

Forma común de cada operación:
- lee credenciales de la fuente inyectada (en cada llamada, sin caché),
- construye la URL como base + segmentos,
- envía la petición con `Authorization: Bearer <token>`,
- devuelve el cuerpo (o `{}` si viene vacío),
- cualquier fallo pasa por `handle_error` y se lanza como `ApiError`.

Sin reintentos, sin caché de respuestas ni de tokens.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client, decode_body
from core.config import AppSettings
from core.domain.errors import ApiError, ApiFailureKind
from core.domain.models import ApiRequest, HttpMethod
from core.interfaces.credentials import CredentialSource
from core.logging_config import get_logger
from core.services.session import read_credentials

logger = get_logger(__name__)


def extract_response_data(body: Any) -> Any:
    """Devuelve el cuerpo sin tocar, o `{}` si es falsy (None, "", 0, False)."""

    return body or {}


def handle_error(exc: Exception) -> ApiError:
    """Registra el fallo y lo colapsa en un `ApiError` con mensaje genérico.

    - `httpx.HTTPStatusError`: el servidor respondió con un status de error.
    - Cualquier otro error de httpx: la respuesta nunca llegó (DNS, conexión,
      timeout, URL inválida...).
    """

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        body = exc.response.text
        logger.error(
            f"Error Status code {status}, Error body is: {body}",
            status_code=status,
            body=body,
            url=str(exc.request.url),
        )
        return ApiError(ApiFailureKind.SERVER, status_code=status, detail=body)

    message = str(exc) or exc.__class__.__name__
    logger.error(f"Some error occurred: {message}", error_type=exc.__class__.__name__)
    return ApiError(ApiFailureKind.TRANSPORT, detail=message)


class MovieApiClient:
    """Proxy asíncrono hacia el backend de películas/usuarios.

    Por qué la fuente de credenciales se inyecta:
    - El cliente no depende de un almacenamiento global; los tests usan un
      store en memoria y la CLI uno en disco.
    - El cliente nunca escribe en la fuente.
    """

    def __init__(
        self,
        credentials: CredentialSource,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.api_base_url

    # -- usuarios sin autenticación ---------------------------------------

    async def register(self, user_details: dict[str, Any]) -> Any:
        logger.debug("Registering user", username=user_details.get("Username"))
        request = ApiRequest(method="POST", url=self._url("users"), body=user_details)
        return decode_body(await self._send(request))

    async def login(self, user_details: dict[str, Any]) -> Any:
        request = ApiRequest(method="POST", url=self._url("login"), body=user_details)
        return decode_body(await self._send(request))

    # -- catálogo ---------------------------------------------------------

    async def list_movies(self) -> Any:
        return await self._authorized("GET", "movies")

    async def get_movie(self, title: str) -> Any:
        return await self._authorized("GET", "movies", self._segment(title))

    async def get_director(self, name: str) -> Any:
        return await self._authorized("GET", "movies", "director", self._segment(name))

    async def get_genre(self, name: str) -> Any:
        return await self._authorized("GET", "genre", self._segment(name))

    # -- cuenta del usuario -----------------------------------------------

    async def get_user(self) -> Any:
        user = read_credentials(self._credentials).user
        return await self._authorized("GET", "users", self._segment(user))

    async def list_favorites(self) -> Any:
        user = read_credentials(self._credentials).user
        return await self._authorized("GET", "users", self._segment(user), "movies")

    async def add_favorite(self, movie_id: str) -> Any:
        username = read_credentials(self._credentials).username
        return await self._authorized(
            "POST",
            "users",
            self._segment(username),
            "movies",
            self._segment(movie_id),
            body={},
        )

    async def remove_favorite(self, movie_id: str) -> Any:
        username = read_credentials(self._credentials).username
        return await self._authorized(
            "DELETE", "users", self._segment(username), "movies", self._segment(movie_id)
        )

    async def edit_user(self, update_details: dict[str, Any]) -> Any:
        username = read_credentials(self._credentials).username
        return await self._authorized(
            "PUT", "users", self._segment(username), body=update_details
        )

    async def delete_user(self) -> Any:
        user = read_credentials(self._credentials).user
        return await self._authorized("DELETE", "users", self._segment(user))

    # -- internals --------------------------------------------------------

    def _segment(self, value: str | None) -> str:
        text = "null" if value is None else str(value)
        if self._settings.encode_path_segments:
            return quote(text, safe="")
        return text

    def _url(self, *segments: str) -> str:
        return self._settings.api_base_url + "/".join(segments)

    async def _authorized(self, method: HttpMethod, *segments: str, body: Any = None) -> Any:
        credentials = read_credentials(self._credentials)
        request = ApiRequest(
            method=method,
            url=self._url(*segments),
            headers={"Authorization": credentials.bearer()},
            body=body,
        )
        response = await self._send(request)
        return extract_response_data(decode_body(response))

    async def _send(self, request: ApiRequest) -> httpx.Response:
        logger.debug("Sending request", method=request.method, url=request.url)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    json=request.body,
                )
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise handle_error(exc) from exc
        logger.debug("Received response", status_code=response.status_code, url=request.url)
        return response
