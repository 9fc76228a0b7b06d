"""Outgoing responses.

``Response`` is frozen; every ``with_*`` call returns a modified copy,
so pipeline stages can decorate a response without sharing state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote

from wren.http.cookies import SetCookie

# Characters left as-is in a Location target; the rest is percent-encoded
_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"

NO_CACHE_HEADERS: tuple[tuple[str, str], ...] = (
    ("Cache-Control", "private, no-cache, no-store, must-revalidate"),
    ("Expires", "-1"),
    ("Pragma", "no-cache"),
)


@dataclass(frozen=True, slots=True)
class Response:
    """Body, status, content type, extra headers and cookies to set."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_no_cache(self) -> Response:
        """Forbid browsers and proxies from caching this response."""
        return replace(self, headers=(*self.headers, *NO_CACHE_HEADERS))

    def with_cookie(self, name: str, value: str, **attributes: Any) -> Response:
        """Add a ``Set-Cookie``; *attributes* are ``SetCookie`` fields."""
        cookie = SetCookie(name=name, value=value, **attributes)
        return replace(self, cookies=(*self.cookies, cookie))

    def without_cookie(self, name: str, path: str = "/") -> Response:
        """Tell the browser to drop *name* (empty value, ``Max-Age=0``)."""
        return self.with_cookie(name, "", max_age=0, path=path)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), default)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body

    def json(self) -> Any:
        return json.loads(self.body_bytes)


@dataclass(frozen=True, slots=True)
class Redirect:
    """Send the client elsewhere: a Location header and an empty body."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()

    def to_response(self) -> Response:
        """Build the bodiless response; non-ASCII in the target is percent-encoded."""
        location = quote(self.url, safe=_URL_SAFE)
        return Response(status=self.status, headers=(("Location", location), *self.headers))


def json_response(data: Any, *, content_type: str = "application/json") -> Response:
    return Response(body=json.dumps(data), content_type=content_type)
