"""The request as the page pipeline sees it.

Everything the pipeline reads comes from the ASGI scope. Pages are only
served for GET and HEAD, so the request body is never consumed. The
request also carries the build-asset manifest of the deployment serving
it, so asset selection works from the request alone.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from wren.http.cookies import parse_cookies
from wren.http.headers import Headers
from wren.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """A frozen HTTP request.

    ``assets`` is the raw build manifest: a list of paths, or a mapping
    of chunk names to paths. It comes from ``scope["assets"]`` when an
    upstream ASGI layer provides one, otherwise from the app.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    server: tuple[str, int] | None
    client: tuple[str, int] | None
    cookies: Mapping[str, str]
    assets: Any

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], *, assets: Any = None) -> Request:
        headers = Headers(scope.get("headers", ()))
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            assets=scope.get("assets", assets),
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        if not self.query.raw:
            return self.path
        return f"{self.path}?{self.query.raw.decode('latin-1')}"
