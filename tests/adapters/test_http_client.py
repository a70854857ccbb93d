"""HTTP wrapper tests: client defaults and body decoding."""

import httpx
import pytest

from adapters.http_client import build_async_client, decode_body
from core.config import AppSettings


def test_decode_empty_body_is_none():
    assert decode_body(httpx.Response(204)) is None


def test_decode_json_body():
    assert decode_body(httpx.Response(200, json={"Title": "Heat"})) == {"Title": "Heat"}
    assert decode_body(httpx.Response(200, json=[])) == []


def test_decode_plain_text_body():
    assert decode_body(httpx.Response(200, text="bob was deleted.")) == "bob was deleted."


@pytest.mark.asyncio
async def test_client_defaults_from_settings():
    settings = AppSettings(_env_file=None, user_agent="tests/1.0", http_timeout_seconds=3.5)

    async with build_async_client(settings, extra_headers={"X-Trace": "1"}) as client:
        assert client.headers["User-Agent"] == "tests/1.0"
        assert client.headers["Accept"] == "application/json"
        assert client.headers["X-Trace"] == "1"
        assert client.timeout.read == 3.5


@pytest.mark.asyncio
async def test_no_timeout_by_default():
    async with build_async_client(AppSettings(_env_file=None)) as client:
        assert client.timeout.connect is None
        assert client.timeout.read is None
