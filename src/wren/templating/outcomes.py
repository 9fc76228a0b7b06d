"""Render outcomes — the closed set of results a page request can have.

Exactly one is produced per request by the dispatcher and consumed once
by the document composer::

    match outcome:
        case PageOutcome() | NotFoundOutcome() | ErrorOutcome():
            ...  # wrapped in the document shell
        case RedirectOutcome(url=url, status=status):
            ...  # bodiless redirect
"""

from dataclasses import dataclass, field
from typing import TypeAlias

from wren.templating.views import ViewTree


@dataclass(frozen=True, slots=True)
class PageOutcome:
    """The matched chain rendered normally."""

    view: ViewTree
    status: int = 200


@dataclass(frozen=True, slots=True)
class NotFoundOutcome:
    """No route matched; the not-found view was rendered."""

    view: ViewTree
    status: int = 404


@dataclass(frozen=True, slots=True)
class RedirectOutcome:
    """A view asked for a redirect; the page view was discarded."""

    url: str
    status: int = 302


@dataclass(frozen=True, slots=True)
class ErrorOutcome:
    """Preload or render failed; the error view was rendered."""

    view: ViewTree
    status: int = 500
    error: BaseException | None = field(default=None, compare=False, repr=False)


RenderOutcome: TypeAlias = PageOutcome | NotFoundOutcome | RedirectOutcome | ErrorOutcome
