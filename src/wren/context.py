"""Request-scoped state.

``RequestContext`` is the one mutable record a request owns. Preload
steps fill ``store``; templates read it and may flag a redirect or a
status override. It is created at request start and discarded with the
response — never shared between requests.

``request_var`` exposes the current ``Request`` to code that has no
other handle on it (template globals, logging helpers).
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.http.request import Request

if TYPE_CHECKING:
    from wren.api import ApiClient
    from wren.storage import Storage

request_var: ContextVar[Request] = ContextVar("wren_request")
"""The current request. Set by the ASGI handler before the pipeline runs."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


@dataclass(slots=True)
class RequestContext:
    """Per-request state passed through preload and render.

    Attributes:
        storage: Signed-cookie storage for this request.
        api: API client bound to ``storage``.
        pathname: Request path being rendered.
        params: Path parameters captured by the route resolver.
        store: Data gathered by preload steps, read by templates.
        url: Redirect target, set while rendering.
        status: Status override, set while rendering.
    """

    storage: Storage
    api: ApiClient
    pathname: str
    params: Mapping[str, Any] = field(default_factory=dict)
    store: dict[str, Any] = field(default_factory=dict)
    url: str | None = None
    status: int | None = None

    def redirect(self, url: str, status: int | None = None) -> None:
        """Ask the dispatcher to answer with a redirect instead of the page."""
        self.url = url
        if status is not None:
            self.status = status

    def set_status(self, status: int) -> None:
        """Override the status of the rendered page."""
        self.status = status

    @property
    def redirected(self) -> bool:
        return self.url is not None
