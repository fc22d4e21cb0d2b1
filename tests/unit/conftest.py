"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv().

The verification service is never contacted: verifiers get an httpx client
whose transport is an httpx.MockTransport recording every request.
"""

from urllib.parse import parse_qs

import httpx
import pytest

from infrastructure.http_client import AsyncHttpClient, HttpClient


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


class FakeVerifyService:
    """Stand-in for the verify endpoint. Set body/status/exc before the call."""

    def __init__(self) -> None:
        self.body = "true\n"
        self.status_code = 200
        self.exc = None
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_form(self) -> dict:
        parsed = parse_qs(self.requests[-1].content.decode(), keep_blank_values=True)
        return {k: v[0] for k, v in parsed.items()}


@pytest.fixture
def verify_service():
    return FakeVerifyService()


@pytest.fixture
def http_client(verify_service):
    client = HttpClient(transport=httpx.MockTransport(verify_service))
    yield client
    client.close()


@pytest.fixture
async def async_http_client(verify_service):
    client = AsyncHttpClient(transport=httpx.MockTransport(verify_service))
    yield client
    await client.aclose()
