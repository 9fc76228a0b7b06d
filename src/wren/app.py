"""Wren application class.

Mutable during setup (route table, template filters and globals, hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

from __future__ import annotations

import logging
import secrets
import threading
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import httpx

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.api import ApiClient
from wren.assets import AssetSource, manifest_file_source
from wren.config import AppConfig
from wren.routing.route import RouteDefinition
from wren.server.endpoints import (
    FAVICON_PATH,
    GLOBALS_PATH,
    MANIFEST_PATH,
    favicon_endpoint,
    globals_endpoint,
    manifest_endpoint,
)
from wren.server.handler import Endpoint, Pipeline, handle_request
from wren.storage import Storage, StorageConfig
from wren.templating.integration import create_environment
from wren.templating.views import ViewRenderer

logger = logging.getLogger("wren.server")

RouteLike = RouteDefinition | Mapping[str, Any]


def _coerce_route(route: RouteLike) -> RouteDefinition:
    if isinstance(route, RouteDefinition):
        return route
    return RouteDefinition.from_dict(route)


class App:
    """The wren application.

    Mutable during setup (routes, filters, hooks). Frozen at runtime
    when ``app.run()`` or ``__call__()`` is first invoked.

    Usage::

        app = App(
            routes=[RouteDefinition("/", template="layout.html", children=(...))],
            config=AppConfig(secret_key="s3cr3t", asset_manifest="build/assets.json"),
        )

    *assets* is either a callable returning the build manifest (called
    once per request) or the manifest itself. When omitted, the manifest
    is read from ``config.asset_manifest``.

    Setup happens at import time on one thread; compiling takes a lock.
    """

    __slots__ = (
        "_api_transport",
        "_asset_source",
        "_freeze_lock",
        "_frozen",
        # Compiled state (populated by _freeze)
        "_pipeline",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "_template_filters",
        "_template_globals",
        "config",
    )

    def __init__(
        self,
        routes: Sequence[RouteLike] = (),
        config: AppConfig | None = None,
        *,
        assets: AssetSource | Any = None,
        api_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes: list[RouteDefinition] = [_coerce_route(route) for route in routes]
        self._asset_source: AssetSource = self._make_asset_source(assets)
        self._api_transport = api_transport
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._template_globals: dict[str, Any] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._pipeline: Pipeline | None = None

    def _make_asset_source(self, assets: Any) -> AssetSource:
        if callable(assets):
            return assets
        if assets is not None:
            return lambda: assets
        if self.config.asset_manifest is not None:
            return manifest_file_source(self.config.asset_manifest)
        return lambda: ()

    # -- Route table --

    def add_route(self, route: RouteLike) -> RouteDefinition:
        """Append a top-level route (a ``RouteDefinition`` or its dict form)."""
        self._check_not_frozen()
        definition = _coerce_route(route)
        self._routes.append(definition)
        return definition

    @property
    def routes(self) -> tuple[RouteDefinition, ...]:
        """The top-level routes, in declaration order."""
        return tuple(self._routes)

    # -- Template integration --

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a Jinja2 template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            filter_name = name or func.__name__
            self._template_filters[filter_name] = func
            return func

        return decorator

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a Jinja2 template global."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            global_name = name or func.__name__
            self._template_globals[global_name] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Run *func* (sync or async) once the server starts, before any request."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Run *func* (sync or async) when the server stops."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile the app and serve it with uvicorn.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        from wren.server.dev import run_server
        from wren.server.logs import configure_logging

        self._ensure_frozen()
        configure_logging(self.config.log_level, self.config.log_format)
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return
        self._ensure_frozen()
        assert self._pipeline is not None
        await handle_request(scope, receive, send, pipeline=self._pipeline)

    async def _run_hooks(self, hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            await invoke(hook)

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Answer the server's lifespan messages.

        The route table is compiled on ``lifespan.startup`` so a broken
        configuration fails the server start instead of the first request.
        """
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Compile once, even when several threads see the first request."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        config = self.config
        routes = tuple(self._routes)

        # 1. Template environment and view layer
        env = create_environment(config, self._template_filters, self._template_globals)
        renderer = ViewRenderer(
            env,
            not_found_template=config.not_found_template,
            error_template=config.error_template,
        )

        # 2. Storage signing key
        secret_key = config.secret_key
        if not secret_key:
            logger.warning(
                "AppConfig.secret_key is not set; storage cookies are signed with a "
                "per-process key and will not survive a restart."
            )
            secret_key = secrets.token_urlsafe(32)
        storage_config = StorageConfig(
            secret_key=secret_key,
            cookie_name=config.storage_cookie,
            max_age=config.storage_max_age,
            secure=config.storage_secure,
        )

        # 3. Outbound API client factory
        transport = self._api_transport

        def api_factory(storage: Storage) -> ApiClient:
            return ApiClient(
                storage=storage,
                base_url=config.api_base_url,
                timeout=config.api_timeout,
                transport=transport,
            )

        # 4. Fixed-path endpoints
        endpoints: dict[str, Endpoint] = {
            GLOBALS_PATH: globals_endpoint(routes),
            MANIFEST_PATH: manifest_endpoint(config),
        }
        favicon = favicon_endpoint(config.public_dir)
        if favicon is not None:
            endpoints[FAVICON_PATH] = favicon

        self._pipeline = Pipeline(
            routes=routes,
            renderer=renderer,
            env=env,
            asset_source=self._asset_source,
            storage_config=storage_config,
            api_factory=api_factory,
            endpoints=endpoints,
            document_template=config.document_template,
            debug=config.debug,
        )
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, filters, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
