"""Wren exception hierarchy.

Shared across the resolver, the preload orchestrator, the dispatcher and
the ASGI handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app configuration or the route table is invalid.

    Typically caught during ``App._freeze()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Preload steps and templates may raise these; the dispatcher uses
    ``status`` for the error page instead of the default 500.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — the requested resource does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — pages are only served for the listed methods.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


@dataclass(frozen=True, slots=True)
class ApiError(HTTPError):
    """The upstream API answered with an error status.

    Raised by ``ApiClient``. When it escapes a preload step the error page
    is rendered with the upstream status.
    """

    url: str = ""


class PreloadError(WrenError):
    """One or more preload steps failed.

    Wraps the first failure observed. ``status`` is taken from the cause
    when it declares one, otherwise 500.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause

    @property
    def status(self) -> int:
        return status_of(self.cause)


def status_of(exc: BaseException, default: int = 500) -> int:
    """Return the HTTP status an exception declares, or *default*.

    Looks for an integer ``status`` (wren) or ``status_code`` attribute in
    the 4xx/5xx range, on the exception itself or on its ``response``
    (``httpx.HTTPStatusError``).
    """
    for source in (exc, getattr(exc, "response", None)):
        for attr in ("status", "status_code"):
            value = getattr(source, attr, None)
            if isinstance(value, int) and not isinstance(value, bool) and 400 <= value < 600:
                return value
    return default
