"""``wren run`` — serve an app with uvicorn."""

import argparse
import sys

from wren.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    CLI flags override the app's config for host, port, and logging.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from wren.server.dev import run_server as serve
    from wren.server.logs import configure_logging

    log_level = args.log_level or app.config.log_level
    configure_logging(log_level, args.log_format or app.config.log_format)

    app._ensure_frozen()
    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        log_level=log_level,
    )
