"""Routing — a static, nested route table and the resolver over it.

The table is built once at startup and shared read-only by every
request; resolution is a pure function of ``(routes, path)``.
"""

from wren.routing.resolver import resolve
from wren.routing.route import Resolution, RouteDefinition

__all__ = ["Resolution", "RouteDefinition", "resolve"]
