"""Serve a live wren App with uvicorn.

``uvicorn.run()`` accepts an import string or an ASGI callable; wren
hands it the App object so the already-configured instance is served.
"""

from __future__ import annotations

import uvicorn


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Start uvicorn with the given wren App.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn's own log level.
    """
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level,
        lifespan="on",
        server_header=False,
    )
    server = uvicorn.Server(config)
    server.run()
