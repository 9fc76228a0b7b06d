"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, runs the page pipeline (resolve, preload,
dispatch, compose), and sends the Response back through ASGI send().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextvars import Token
from dataclasses import dataclass, replace

from jinja2 import Environment

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.api import ApiClient
from wren.assets import AssetManifest, AssetSource
from wren.context import RequestContext, request_var
from wren.errors import HTTPError, MethodNotAllowed, PreloadError
from wren.http.request import Request
from wren.http.response import Redirect, Response
from wren.pages.preload import preload
from wren.pages.seo import aggregate_seo
from wren.routing.resolver import resolve
from wren.routing.route import RouteDefinition
from wren.server.dispatch import dispatch
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.sender import send_response
from wren.storage import Storage, StorageConfig
from wren.templating.document import compose
from wren.templating.views import ViewRenderer

logger = logging.getLogger("wren.server")

PAGE_METHODS: frozenset[str] = frozenset({"GET", "HEAD"})

# Fixed-path endpoints answered before the page pipeline
Endpoint = Callable[[Request], Response]
ApiFactory = Callable[[Storage], ApiClient]


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Everything the page pipeline needs, compiled once by ``App._freeze()``."""

    routes: tuple[RouteDefinition, ...]
    renderer: ViewRenderer
    env: Environment
    asset_source: AssetSource
    storage_config: StorageConfig
    api_factory: ApiFactory
    endpoints: Mapping[str, Endpoint]
    document_template: str = "_document.html"
    debug: bool = False


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Pipeline,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    # Set request context var (reset after dispatch)
    token: Token[Request] = request_var.set(request)

    try:
        # An upstream layer may already have attached the build manifest
        if request.assets is None:
            request = replace(request, assets=await invoke(pipeline.asset_source))
            request_var.set(request)

        if request.method not in PAGE_METHODS:
            raise MethodNotAllowed(PAGE_METHODS)

        endpoint = pipeline.endpoints.get(request.path)
        if endpoint is not None:
            response = await invoke(endpoint, request)
        else:
            response = await render_page(request, pipeline)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, pipeline.debug)
    finally:
        request_var.reset(token)

    logger.info("%s %s %d", request.method, request.path, response.status)
    head = request.method == "HEAD"
    try:
        await send_response(response, send, head=head)
    except UnicodeEncodeError as exc:
        # Headers are encoded before the first message, so nothing was sent yet
        await send_response(handle_internal_error(exc, request, pipeline.debug), send, head=head)


async def render_page(request: Request, pipeline: Pipeline) -> Response:
    """Run the page pipeline for *request*.

    Resolve the route chain, select assets, preload data, dispatch to
    one render outcome, and compose the document. Storage changes made
    along the way are attached to the final response.
    """
    resolution = resolve(pipeline.routes, request.path)
    assets = AssetManifest.select(request.assets, resolution.module_id)

    storage = Storage(request, pipeline.storage_config)
    context = RequestContext(
        storage=storage,
        api=pipeline.api_factory(storage),
        pathname=request.path,
        params=resolution.params,
    )

    preload_error: PreloadError | None = None
    try:
        await preload(resolution.chain, context)
    except PreloadError as exc:
        preload_error = exc

    seo = aggregate_seo(resolution.chain) if preload_error is None else {}
    outcome = dispatch(resolution, context, pipeline.renderer, preload_error=preload_error)
    result = compose(
        outcome,
        assets,
        seo,
        env=pipeline.env,
        template=pipeline.document_template,
    )

    if isinstance(result, Redirect):
        response = result.to_response()
    else:
        response = Response(body=result, status=outcome.status)
    return storage.apply(response)

