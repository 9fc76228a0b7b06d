"""Last-resort error responses.

Page failures never reach this module: the dispatcher turns them into
the styled error page. What lands here is what happens outside the page
pipeline (unsupported methods, a failing endpoint) or a failure of the
document shell itself.
"""

import logging
import traceback

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    body = exc.detail or f"Error {exc.status}"
    resp = Response(body=body, content_type="text/plain; charset=utf-8").with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
    else:
        body = "Internal Server Error"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
