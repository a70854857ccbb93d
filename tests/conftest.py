"""Root conftest with shared fixtures: isolated settings, in-memory session, fake backend."""

from __future__ import annotations

import os
from typing import Any, Callable

import httpx
import pytest

from adapters.credential_store import MemoryCredentialStore
from adapters.movie_api import MovieApiClient
from core.config import AppSettings

BASE_URL = "https://movies.test/"

# Ensure tests never pick up a developer's real backend config
for _key in list(os.environ):
    if _key.startswith("MYFLIX_"):
        os.environ.pop(_key)


class FakeBackend:
    """Records every request and answers from a (method, path) routing table."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def respond(self, method: str, path: str, status_code: int = 200, **kwargs: Any) -> None:
        self._routes[(method, path)] = lambda request: httpx.Response(status_code, **kwargs)

    def fail(self, method: str, path: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        self._routes[(method, path)] = _raise

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.raw_path.decode("ascii")))
        if route is None:
            return httpx.Response(404, text="route not mocked")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_base_url=BASE_URL)


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore({"token": "abc", "Username": "bob", "user": "bob"})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(store, settings, backend) -> MovieApiClient:
    return MovieApiClient(store, settings, transport=backend.transport)
