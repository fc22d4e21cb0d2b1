"""Shared HTTP clients with configurable timeout."""

from typing import Any

import httpx


class HttpClient:
    """Thin wrapper around httpx.Client with a configurable timeout.

    One instance per external service keeps timeouts independently configurable.
    """

    def __init__(self, timeout: float = 5.0, **client_kwargs: Any) -> None:
        self._client = httpx.Client(timeout=timeout, **client_kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self._client.post(url, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncHttpClient:
    """Async counterpart of HttpClient around httpx.AsyncClient."""

    def __init__(self, timeout: float = 5.0, **client_kwargs: Any) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
