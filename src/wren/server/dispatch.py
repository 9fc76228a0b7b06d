"""Render dispatch — choose exactly one outcome for a page request.

Runs after the preload orchestrator has settled. Precedence:

1. Preload failed            -> ``ErrorOutcome`` (status from the failure, else 500)
2. No route matched          -> ``NotFoundOutcome`` (404)
3. The page view redirected  -> ``RedirectOutcome`` (context status if 3xx, else 302)
4. Otherwise                 -> ``PageOutcome`` (context status, else 200)

A failure while rendering the page or the not-found view is turned into
an ``ErrorOutcome`` as well. Only a failure of the error view itself
escapes to the caller.
"""

from __future__ import annotations

import logging

from wren.context import RequestContext
from wren.errors import PreloadError, status_of
from wren.routing.route import Resolution
from wren.templating.outcomes import (
    ErrorOutcome,
    NotFoundOutcome,
    PageOutcome,
    RedirectOutcome,
    RenderOutcome,
)
from wren.templating.views import ViewRenderer

logger = logging.getLogger("wren.dispatch")


def redirect_status(status: int | None) -> int:
    """The status for a redirect: a 3xx override, else 302."""
    if status is not None and 300 <= status < 400:
        return status
    return 302


def error_outcome(
    exc: BaseException,
    context: RequestContext,
    renderer: ViewRenderer,
) -> ErrorOutcome:
    """Render the error view for *exc*.

    Whatever the preload steps stored is not shown; the error view gets
    an empty store.
    """
    status = status_of(exc)
    cause = exc.cause if isinstance(exc, PreloadError) else exc
    view = renderer.render_error(
        url=context.pathname,
        context=context,
        store={},
        error=cause,
        status=status,
    )
    return ErrorOutcome(view=view, status=status, error=cause)


def dispatch(
    resolution: Resolution,
    context: RequestContext,
    renderer: ViewRenderer,
    *,
    preload_error: BaseException | None = None,
) -> RenderOutcome:
    """Produce the single render outcome for this request."""
    if preload_error is not None:
        return error_outcome(preload_error, context, renderer)

    try:
        if not resolution.chain:
            view = renderer.render_not_found(
                url=context.pathname,
                context=context,
                store=context.store,
            )
            return NotFoundOutcome(view=view)

        view = renderer.render_routes(
            url=context.pathname,
            context=context,
            routes=resolution.chain,
            store=context.store,
        )
    except Exception as exc:
        logger.exception("Render failed for %s", context.pathname)
        return error_outcome(exc, context, renderer)

    if context.url is not None:
        # The page view is discarded; only the redirect propagates
        return RedirectOutcome(url=context.url, status=redirect_status(context.status))

    return PageOutcome(view=view, status=context.status or 200)
