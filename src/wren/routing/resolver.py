"""Route resolution over the static route tree.

Walks the tree matching path segments level by level. The deepest chain
wins; among equally deep chains the first-declared route wins. Pure
function of its inputs, safe to call from any number of concurrent
requests against the same shared tree.

A chain matches only when it consumes the whole request path, unless its
last route is declared with ``exact=False``, in which case any path under
it matches.
"""

from collections.abc import Sequence
from typing import Any

from wren.routing.params import convert, matches
from wren.routing.route import PathSegment, Resolution, RouteDefinition

_Match = tuple[tuple[RouteDefinition, ...], dict[str, Any]]


def split_path(path: str) -> list[str]:
    """Split a request path into non-empty segments.

    ``"/blog/hello/"`` -> ``["blog", "hello"]``; ``"/"`` -> ``[]``.
    """
    return [part for part in path.strip("/").split("/") if part]


def resolve(routes: Sequence[RouteDefinition], path: str) -> Resolution:
    """Resolve *path* to its owning module and matched route chain.

    Returns a ``Resolution`` whose ``chain`` runs from the root route to
    the most specific match. ``module_id`` is the ``module`` of the
    deepest route in the chain that declares one. No match yields an
    empty chain and ``module_id=None``.
    """
    best = _match_level(routes, split_path(path), 0, {})
    if best is None:
        return Resolution(module_id=None, chain=(), params={})

    chain, params = best
    module_id = next((route.module for route in reversed(chain) if route.module), None)
    return Resolution(module_id=module_id, chain=chain, params=params)


def _match_level(
    routes: Sequence[RouteDefinition],
    parts: list[str],
    index: int,
    params: dict[str, Any],
) -> _Match | None:
    """Best match among sibling *routes* for ``parts[index:]``."""
    best: _Match | None = None

    for route in routes:
        consumed = _match_segments(route.segments, parts, index)
        if consumed is None:
            continue
        next_index, captured = consumed
        route_params = {**params, **captured}

        candidate: _Match | None = None
        if route.children:
            below = _match_level(route.children, parts, next_index, route_params)
            if below is not None:
                candidate = ((route, *below[0]), below[1])

        if candidate is None and (next_index == len(parts) or not route.exact):
            candidate = ((route,), route_params)

        # Strictly deeper replaces; ties keep the first-declared route
        if candidate is not None and (best is None or len(candidate[0]) > len(best[0])):
            best = candidate

    return best


def _match_segments(
    segments: tuple[PathSegment, ...],
    parts: list[str],
    index: int,
) -> tuple[int, dict[str, Any]] | None:
    """Match a route's segments against the path starting at *index*.

    Returns the index after the consumed segments plus captured params,
    or ``None`` if the route does not match here.
    """
    captured: dict[str, Any] = {}
    position = index

    for segment in segments:
        if segment.is_catch_all:
            if position >= len(parts):
                return None
            captured[segment.param_name or "path"] = "/".join(parts[position:])
            return len(parts), captured

        if position >= len(parts):
            return None
        part = parts[position]

        if segment.is_param:
            if not matches(part, segment.param_type):
                return None
            captured[segment.param_name or ""] = convert(part, segment.param_type)
        elif part != segment.value:
            return None
        position += 1

    return position, captured
