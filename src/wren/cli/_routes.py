"""``wren routes`` — print the route tree.

One line per route, indented by depth, with the owning module, the
template, and markers for routes that preload data or declare SEO.
"""

import argparse
import sys

from wren.cli._resolve import resolve_app
from wren.routing.route import RouteDefinition, walk


def format_route(depth: int, route: RouteDefinition) -> str:
    """One table row for *route* at *depth*."""
    markers = []
    if route.preload is not None:
        markers.append("preload")
    if route.seo:
        markers.append("seo")
    if route.redirect is not None:
        markers.append(f"-> {route.redirect}")
    path = "  " * depth + route.path
    return "{:<32}  {:<12}  {:<24}  {}".format(
        path,
        route.module or "-",
        route.template or "-",
        ", ".join(markers),
    ).rstrip()


def run_routes(args: argparse.Namespace) -> None:
    """List the route tree of a wren app."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    print("{:<32}  {:<12}  {:<24}  {}".format("PATH", "MODULE", "TEMPLATE", "FLAGS").rstrip())
    print("-" * 80)
    for depth, route in walk(routes):
        print(format_route(depth, route))
