"""Outbound API client handed to preload steps.

Thin wrapper over ``httpx.AsyncClient``. A client is opened per call so
no connection state is shared between requests. The auth token kept in
``Storage`` (if any) is forwarded as a bearer token.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wren.errors import ApiError, ConfigurationError
from wren.storage import Storage

logger = logging.getLogger("wren.api")

TOKEN_KEY = "token"


class ApiClient:
    """Async JSON API client bound to one request's storage.

    Usage::

        api = ApiClient(storage=storage, base_url="https://api.example.com")
        posts = await api.get("/posts", params={"page": 1})

    Non-2xx answers raise ``ApiError`` carrying the upstream status, so a
    failing preload step renders the error page with that status.
    """

    __slots__ = ("_base_url", "_timeout", "_transport", "storage")

    def __init__(
        self,
        *,
        storage: Storage | None = None,
        base_url: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.storage = storage
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.storage.get(TOKEN_KEY) if self.storage is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded body.

        JSON bodies are parsed; empty bodies return ``None``; anything
        else is returned as text.
        """
        if not self._base_url and not path.startswith(("http://", "https://")):
            msg = f"Relative API path {path!r} needs AppConfig.api_base_url to be set."
            raise ConfigurationError(msg)

        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %r", method, path, exc)
            raise ApiError(
                status=502,
                detail=str(exc) or type(exc).__name__,
                url=f"{self._base_url}{path}",
            ) from exc

        logger.debug("%s %s -> %d", method, response.request.url, response.status_code)

        if response.is_error:
            raise ApiError(
                status=response.status_code,
                detail=response.text[:200],
                url=str(response.request.url),
            )
        if not response.content:
            return None
        if "json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
