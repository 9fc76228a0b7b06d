"""Fixed-path endpoints served alongside the page pipeline.

- ``/_globals``: the route table and the full asset lists, for the
  client-side router. Never cached.
- ``/manifest.json``: the web app manifest built from ``AppConfig``.
- ``/favicon.ico``: served from the public directory when present.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from wren.assets import extract_files
from wren.config import PWA_ICON_SIZES, AppConfig
from wren.http.request import Request
from wren.http.response import Response, json_response
from wren.routing.route import RouteDefinition
from wren.server.handler import Endpoint

logger = logging.getLogger("wren.server")

GLOBALS_PATH = "/_globals"
MANIFEST_PATH = "/manifest.json"
FAVICON_PATH = "/favicon.ico"


def globals_endpoint(routes: Sequence[RouteDefinition]) -> Endpoint:
    """``/_globals`` — ``{"routes", "allCss", "allJs"}`` for this deployment."""
    table = [route.to_dict() for route in routes]

    def handler(request: Request) -> Response:
        payload = {
            "routes": table,
            "allCss": list(extract_files(request.assets, ".css")),
            "allJs": list(extract_files(request.assets, ".js")),
        }
        return json_response(payload).with_no_cache()

    return handler


def pwa_manifest(config: AppConfig) -> dict[str, Any]:
    """The web app manifest document for *config*."""
    return {
        "name": config.pwa_name,
        "short_name": config.pwa_short_name,
        "description": config.pwa_description,
        "start_url": config.pwa_start_url,
        "display": config.pwa_display,
        "theme_color": config.pwa_theme_color,
        "background_color": config.pwa_background_color,
        "icons": [
            {
                "src": config.pwa_icon_path.format(size=size),
                "sizes": f"{size}x{size}",
            }
            for size in PWA_ICON_SIZES
        ],
    }


def manifest_endpoint(config: AppConfig) -> Endpoint:
    """``/manifest.json`` — served as ``application/manifest+json``."""
    manifest = pwa_manifest(config)

    def handler(request: Request) -> Response:
        return json_response(manifest, content_type="application/manifest+json").with_no_cache()

    return handler


def favicon_endpoint(public_dir: str | Path | None) -> Endpoint | None:
    """``/favicon.ico`` from *public_dir*, or ``None`` if there is none.

    The file is read once and cached by the browser for a year.
    """
    if public_dir is None:
        return None
    path = Path(public_dir) / "favicon.ico"
    if not path.is_file():
        logger.info("Please add a favicon at %s for improved performance.", path)
        return None
    icon = path.read_bytes()

    def handler(request: Request) -> Response:
        return Response(body=icon, content_type="image/x-icon").with_header(
            "Cache-Control", "public, max-age=31536000"
        )

    return handler
